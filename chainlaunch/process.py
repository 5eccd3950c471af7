"""Child process management for pipeline stages.

Children inherit the parent's stdin/stdout/stderr, so their output goes
straight to the operator's console and is never captured or parsed.
"""

from __future__ import annotations

import logging
import subprocess

from chainlaunch.config import StepCommand
from chainlaunch.schemas import StepResult

logger = logging.getLogger(__name__)

# Time a child gets to exit after a termination request before it is killed
TERMINATE_GRACE_SECONDS = 5.0


class ManagedProcess:
    """A child process that can be started, awaited and terminated."""

    def __init__(self, step: StepCommand):
        self.step = step
        self._proc: subprocess.Popen | None = None
        self._terminated = False

    def start(self) -> ManagedProcess:
        """Spawn the child.

        Raises:
            FileNotFoundError: If the executable cannot be found.
        """
        logger.info(f"Starting {self.step.description}: {' '.join(self.step.argv)} (cwd: {self.step.cwd})")
        self._proc = subprocess.Popen(self.step.argv, cwd=str(self.step.cwd))
        logger.debug(f"{self.step.description} started with pid {self._proc.pid}")
        return self

    @property
    def pid(self) -> int | None:
        return self._proc.pid if self._proc is not None else None

    @property
    def running(self) -> bool:
        return self._proc is not None and self._proc.poll() is None

    @property
    def returncode(self) -> int | None:
        return self._proc.returncode if self._proc is not None else None

    def await_exit(self, timeout: float | None = None) -> int:
        """Block until the child exits and return its exit code."""
        if self._proc is None:
            raise RuntimeError(f"{self.step.description} was never started")
        return self._proc.wait(timeout=timeout)

    def terminate(self, grace_seconds: float = TERMINATE_GRACE_SECONDS) -> None:
        """Request termination once; kill if the child outlives the grace period."""
        if self._proc is None or self._terminated:
            return
        self._terminated = True

        if self._proc.poll() is not None:
            logger.debug(f"{self.step.description} already exited with {self._proc.returncode}")
            return

        logger.info(f"Terminating {self.step.description} (pid {self._proc.pid})")
        self._proc.terminate()
        try:
            self._proc.wait(timeout=grace_seconds)
        except subprocess.TimeoutExpired:
            logger.warning(f"{self.step.description} ignored terminate after {grace_seconds}s, killing")
            self._proc.kill()
            self._proc.wait()
        except KeyboardInterrupt:
            logger.warning(f"Interrupted while stopping {self.step.description}, killing")
            self._proc.kill()
            self._proc.wait()


def launch(step: StepCommand) -> ManagedProcess:
    """Start a long-running process and return its handle."""
    return ManagedProcess(step).start()


def run_step(step: StepCommand) -> StepResult:
    """Run a one-shot step to completion.

    Args:
        step: The command to run

    Returns:
        StepResult with the step's exit code
    """
    proc = launch(step)
    exit_code = proc.await_exit()

    if exit_code == 0:
        logger.info(f"{step.description} finished")
    else:
        logger.warning(f"{step.description} exited with code {exit_code}")

    return StepResult(stage=step.stage, command=list(step.argv), exit_code=exit_code)
