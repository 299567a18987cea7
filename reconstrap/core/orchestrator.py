#!/usr/bin/env python3
"""
reconstrap Installer Orchestrator
Runs the provisioning steps in order: strict for installation, best-effort
for verification
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from reconstrap.core import reporter
from reconstrap.core.context import InstallContext
from reconstrap.core.results import Stage, StepResult, VerificationReport
from reconstrap.errors import ReconstrapError
from reconstrap.platform.installers import ClonedToolInstaller, GoToolInstaller, installer_for
from reconstrap.platform.profile import EnvironmentConfigurator
from reconstrap.platform.runtime import GoRuntimeInstaller
from reconstrap.platform.symlinks import SymlinkCreator
from reconstrap.platform.verifier import Verifier


@dataclass
class RunOutcome:
    """Where the run stopped and what each step reported"""
    stage: Stage
    results: List[StepResult] = field(default_factory=list)

    @property
    def cancelled(self) -> bool:
        return self.stage == Stage.CANCELLED

    @property
    def report(self) -> Optional[VerificationReport]:
        for result in self.results:
            if result.stage == Stage.VERIFIED:
                return result.payload.get('report')
        return None


class Orchestrator:
    """
    Linear state machine:
    INIT -> CONFIRM -> DEPS_INSTALLED -> RUNTIME_READY -> ENV_CONFIGURED ->
    TOOLS_INSTALLED -> CLONED_TOOL_INSTALLED -> LINKS_CREATED -> VERIFIED -> DONE

    A declined confirmation ends in CANCELLED with no side effects. Any
    ReconstrapError from a strict step stops the run; earlier effects stay.
    """

    def __init__(self, ctx: InstallContext, system_installer=None, runtime_installer=None,
                 env_configurator=None, tool_installer=None, cloned_installer=None,
                 symlink_creator=None, verifier=None):
        self.ctx = ctx
        self.system_installer = system_installer or installer_for(ctx.platform.kind)
        self.runtime_installer = runtime_installer or GoRuntimeInstaller()
        self.env_configurator = env_configurator or EnvironmentConfigurator()
        self.tool_installer = tool_installer or GoToolInstaller()
        self.cloned_installer = cloned_installer or ClonedToolInstaller()
        self.symlink_creator = symlink_creator or SymlinkCreator()
        self.verifier = verifier or Verifier.from_context(ctx)
        self.stage = Stage.INIT

    def steps(self) -> List[Tuple[Stage, Callable[[InstallContext], StepResult], bool]]:
        """(stage reached on success, step, strict)"""
        return [
            (Stage.DEPS_INSTALLED, self.system_installer.install, True),
            (Stage.RUNTIME_READY, self.runtime_installer.ensure, True),
            (Stage.ENV_CONFIGURED, self.env_configurator.configure, True),
            (Stage.TOOLS_INSTALLED, self.tool_installer.install_all, True),
            (Stage.CLONED_TOOL_INSTALLED, self.cloned_installer.install, True),
            (Stage.LINKS_CREATED, self.symlink_creator.create, True),
            (Stage.VERIFIED, self.verifier.run, False),
        ]

    def run(self, confirm: Callable[[], bool]) -> RunOutcome:
        """
        Execute the whole sequence

        Args:
            confirm: Asked once before any side effect; False cancels

        Returns:
            RunOutcome ending in DONE or CANCELLED

        Raises:
            ReconstrapError: first failing strict step, with `.stage` set to
            the stage that was being entered
        """
        outcome = RunOutcome(stage=Stage.INIT)

        self.stage = Stage.CONFIRM
        if not confirm():
            self.stage = outcome.stage = Stage.CANCELLED
            return outcome

        for stage, step, strict in self.steps():
            reporter.console.print("")
            try:
                result = step(self.ctx)
            except ReconstrapError as e:
                e.stage = stage
                outcome.stage = self.stage
                if strict:
                    raise
                result = StepResult.failed(stage, e.message)
            except OSError as e:
                if strict:
                    raise
                result = StepResult.failed(stage, str(e))

            outcome.results.append(result)
            self.stage = outcome.stage = stage

            if stage == Stage.VERIFIED and result.payload.get('report') is not None:
                reporter.print_verification(result.payload['report'])
            else:
                reporter.print_step_result(result)

        self.stage = outcome.stage = Stage.DONE
        return outcome
