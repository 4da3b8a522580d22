# SPDX-License-Identifier: MIT
"""Tagging services.

Services implement one tagging run, coordinating between the core types
(core/) and infrastructure (git/, github/).
"""

from cargotag.services.errors import TagError
from cargotag.services.manifest import VersionInfo, read_manifest_version
from cargotag.services.report import report
from cargotag.services.tag_check import (
    LocalTagChecker,
    RemoteRefChecker,
    TagExistenceChecker,
    select_checker,
)
from cargotag.services.tagging import RunOutputs, TagDecision, TagService

__all__ = [
    "TagError",
    # Version Reader
    "VersionInfo",
    "read_manifest_version",
    # Existence check
    "TagExistenceChecker",
    "RemoteRefChecker",
    "LocalTagChecker",
    "select_checker",
    # Workflow
    "RunOutputs",
    "TagDecision",
    "TagService",
    # Reporting
    "report",
]
