"""
Common plumbing for concrete probes.

``BaseProbe.invoke()`` is the probe boundary: subclasses implement
``observe()`` and raise ``ProbeTransientError`` / ``ProbeAbsentTargetError``
when an observation is not possible. ``invoke()`` turns those into
``QueryFailed`` / ``TargetAbsent`` samples and logs them, so nothing is
raised to the collector.
"""

from abc import abstractmethod
from typing import List, Optional, Union

from monitools.errors import ProbeAbsentTargetError, ProbeTransientError
from monitools.interfaces.probe import ProbeInterface
from monitools.models import QueryFailed, Sample, TargetAbsent
from monitools.utils import CommandExecutor, format_command


class BaseProbe(ProbeInterface):

    def __init__(self, logger, executor: Optional[CommandExecutor] = None,
                 timeout: Optional[float] = None):
        self.logger = logger
        self.executor = executor or CommandExecutor(logger)
        self.timeout = timeout

    @abstractmethod
    def observe(self) -> Sample:
        """Make one observation or raise a ProbeError subclass."""
        pass

    def invoke(self) -> Sample:
        try:
            return self.observe()
        except ProbeAbsentTargetError as e:
            self.logger.warning(f"[{self.name}] {e.message}")
            return TargetAbsent(reason=e.message)
        except ProbeTransientError as e:
            self.logger.warning(f"[{self.name}] {e.message}")
            self.logger.debug(str(e))
            return QueryFailed(reason=e.message)

    def run_command(self, command: List[str], text: bool = True,
                    timeout: Optional[float] = None) -> Union[str, bytes]:
        """Run ``command`` and return its stdout.

        Raises:
            ProbeTransientError: On a non-zero exit status, a missing executable or a timeout.
        """
        timeout = self.timeout if timeout is None else timeout
        stdout, stderr, return_code = self.executor.execute(command, timeout=timeout, text=text)
        if return_code == 0:
            return stdout

        if isinstance(stderr, bytes):
            stderr = stderr.decode(errors='replace')
        if return_code is None:
            message = f"`{command[0]}` did not finish within {timeout}s"
        else:
            message = f"could not capture output of `{format_command(command)}` (exit code {return_code})"
        raise ProbeTransientError(
            message,
            probe=self.name,
            command=format_command(command),
            stderr=(stderr or "").strip(),
            timed_out=return_code is None,
        )

