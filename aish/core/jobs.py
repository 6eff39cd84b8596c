#!/usr/bin/env python3
import subprocess
from dataclasses import dataclass
from typing import Iterator, List, Optional

import psutil

from ..config import Config
from ..logger import get_logger

logger = get_logger(__name__)


@dataclass
class Job:
    display_id: int
    process: subprocess.Popen
    command: str = ""

    @property
    def pid(self) -> int:
        return self.process.pid


class JobTable:
    """Background processes started by the shell, in spawn order."""

    def __init__(self) -> None:
        self._jobs: List[Job] = []

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(list(self._jobs))

    def add(self, process: subprocess.Popen, command: str = "") -> Job:
        job = Job(display_id=len(self._jobs) + 1, process=process, command=command)
        self._jobs.append(job)
        logger.debug("job [%d] registered: pid %d %s", job.display_id, job.pid, command)
        return job

    def poll(self, ui) -> List[Job]:
        """
        Reap finished jobs without blocking.

        Each finished job is reported through ``ui.display_job_done`` exactly
        once and dropped from the table. A job whose status cannot be read is
        dropped without a report.
        """
        finished: List[Job] = []
        remaining: List[Job] = []

        for job in self._jobs:
            try:
                status = job.process.poll()
            except OSError as error:
                logger.debug("dropping job [%d]: %s", job.display_id, error)
                continue

            if status is None:
                remaining.append(job)
                continue

            logger.debug("job [%d] finished with status %s", job.display_id, status)
            finished.append(job)

        self._jobs = remaining

        for job in finished:
            ui.display_job_done(job)

        return finished

    def shutdown(self, timeout: Optional[float] = None) -> int:
        """Terminate and reap every remaining job. Returns how many were drained."""
        if timeout is None:
            timeout = Config.JOB_TERMINATE_TIMEOUT

        drained = 0
        while self._jobs:
            job = self._jobs.pop(0)
            self._terminate(job, timeout)
            drained += 1

        return drained

    @staticmethod
    def _descendants(pid: int) -> List[psutil.Process]:
        try:
            return psutil.Process(pid).children(recursive=True)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return []

    def _terminate(self, job: Job, timeout: float) -> None:
        process = job.process
        descendants = self._descendants(job.pid)

        if process.poll() is None:
            logger.debug("terminating job [%d] (pid %d)", job.display_id, job.pid)
            try:
                process.terminate()
            except ProcessLookupError:
                pass

        for child in descendants:
            try:
                child.terminate()
            except psutil.NoSuchProcess:
                continue

        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.debug("job [%d] ignored SIGTERM, killing", job.display_id)
            process.kill()
            process.wait()

        if descendants:
            _, alive = psutil.wait_procs(descendants, timeout=timeout)
            for child in alive:
                try:
                    child.kill()
                except psutil.NoSuchProcess:
                    continue
