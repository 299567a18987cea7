#!/usr/bin/env python3
"""
reconstrap Verifier
Reports which expected tools resolve on the search path
"""

from typing import List, Optional, Sequence

from reconstrap.core.results import InstallResult, Stage, StepResult, VerificationReport


class Verifier:
    """
    Best-effort presence check

    Never raises for a missing tool; all misses are aggregated into one
    VerificationReport.
    """

    def __init__(self, expected: Sequence[str], cloned_tool: Optional[str] = None):
        self.expected: List[str] = list(expected)
        self.cloned_tool = cloned_tool

    @classmethod
    def from_context(cls, ctx) -> 'Verifier':
        return cls(ctx.config.verify_tools, ctx.config.cloned_tool_name)

    def verify(self, ctx) -> VerificationReport:
        report = VerificationReport()

        for tool in self.expected:
            path = ctx.runner.which(tool)
            report.results.append(InstallResult(name=tool, found=bool(path), path=path or ''))

        if self.cloned_tool:
            entry = ctx.cloned_tool_entry
            if entry.is_file():
                report.results.append(InstallResult(self.cloned_tool, True, str(entry)))
            else:
                path = ctx.runner.which(self.cloned_tool)
                report.results.append(InstallResult(self.cloned_tool, bool(path), path or ''))

        return report

    def run(self, ctx) -> StepResult:
        report = self.verify(ctx)
        if report.ok:
            return StepResult.success(Stage.VERIFIED, "All tools installed successfully!", report=report)
        # Advisory only: partial success is still a completed step
        return StepResult.success(
            Stage.VERIFIED,
            f"Some tools failed to install: {' '.join(report.missing)}",
            report=report,
        )
