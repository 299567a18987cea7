#!/usr/bin/env python3
"""
reconstrap Step Results
Outcome records returned by each provisioning step
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Stage(Enum):
    """Orchestrator states, in execution order"""
    INIT = "init"
    CONFIRM = "confirm"
    DEPS_INSTALLED = "deps-installed"
    RUNTIME_READY = "runtime-ready"
    ENV_CONFIGURED = "env-configured"
    TOOLS_INSTALLED = "tools-installed"
    CLONED_TOOL_INSTALLED = "cloned-tool-installed"
    LINKS_CREATED = "links-created"
    VERIFIED = "verified"
    DONE = "done"
    CANCELLED = "cancelled"


class StepStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class StepResult:
    """What one step did"""
    stage: Stage
    status: StepStatus
    detail: str = ""
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status != StepStatus.FAILED

    @classmethod
    def success(cls, stage: Stage, detail: str = "", **payload) -> 'StepResult':
        return cls(stage, StepStatus.SUCCESS, detail, payload)

    @classmethod
    def skipped(cls, stage: Stage, detail: str = "", **payload) -> 'StepResult':
        return cls(stage, StepStatus.SKIPPED, detail, payload)

    @classmethod
    def failed(cls, stage: Stage, detail: str = "", **payload) -> 'StepResult':
        return cls(stage, StepStatus.FAILED, detail, payload)


@dataclass
class InstallResult:
    """Verification outcome for one tool"""
    name: str
    found: bool
    path: str = ""


@dataclass
class VerificationReport:
    """Aggregated verifier output"""
    results: List[InstallResult] = field(default_factory=list)

    @property
    def found(self) -> List[InstallResult]:
        return [r for r in self.results if r.found]

    @property
    def missing(self) -> List[str]:
        return [r.name for r in self.results if not r.found]

    @property
    def ok(self) -> bool:
        return not self.missing
