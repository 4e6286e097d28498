'''
See COPYRIGHT.md for copyright information.

Extracts gate (conditional visibility) rules from a XULE rule file.

Only a narrow subset of XULE is recognized. A rule file is split into blocks at each
"output" line, and a block is a gate rule when its header is exactly

    output <gate>-<controlled>

and its body is the existence check

    $a1 == Yes and $a2 > 0

meaning the controlled field is reported only when the gate answers Yes. Headers with
several hyphens are dimensional or aggregate rules, headers ending in _sum are sum
rules; those and any other block are skipped, never reported as errors. The literal
"Yes" is translated to the gate field's own enumeration literal by the Loader.
'''
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Union

import regex as re

from amsfsurvey import SurveyConst, SurveyLog
from amsfsurvey.PythonUtil import strTruncate
from amsfsurvey.SurveyOptions import TaxonomyOptions

blockStartPattern = re.compile(r"\n(?=output\s)")
headerPattern = re.compile(r"^output\s+(\S+)\s*$", re.MULTILINE)
gateHeaderPattern = re.compile(r"^(\w+)-(\w+)$")
aggregateSuffixPattern = re.compile(r"_sum$", re.IGNORECASE)
existencePattern = re.compile(r"\$a1\s*==\s*Yes\s+and\s+\$a2\s*>\s*0")


@dataclass(frozen=True)
class GateRule:
    controlledId: str
    controllingId: str
    requiredValue: str = SurveyConst.gateSentinel


@dataclass(frozen=True)
class SkippedBlock:
    header: str
    reason: str


RuleBlock = Union[GateRule, SkippedBlock]


@dataclass(frozen=True)
class RuleData:
    dependencies: dict[str, dict[str, str]] = field(default_factory=dict)
    gateIds: frozenset[str] = field(default_factory=frozenset)
    skipped: tuple[SkippedBlock, ...] = ()


def splitBlocks(text: str) -> list[str]:
    return [block for block in blockStartPattern.split(text.replace("\r\n", "\n")) if block.strip()]


def classifyBlock(block: str) -> RuleBlock:
    headerMatch = headerPattern.search(block)
    if headerMatch is None:
        return SkippedBlock(strTruncate(block, 40), "noHeader")
    header = headerMatch.group(1)
    if aggregateSuffixPattern.search(header):
        return SkippedBlock(header, "aggregateRule")
    gateMatch = gateHeaderPattern.match(header)
    if gateMatch is None:
        return SkippedBlock(header, "multiTermHeader")
    if not existencePattern.search(block):
        return SkippedBlock(header, "notExistenceCheck")
    return GateRule(controlledId=gateMatch.group(2), controllingId=gateMatch.group(1))


class RuleParser:
    def __init__(self, xulePath: str | None, options: TaxonomyOptions | None = None) -> None:
        self.xulePath = xulePath
        self.options = options or TaxonomyOptions()

    def parse(self) -> RuleData:
        if not self.xulePath or not os.path.exists(self.xulePath):
            return RuleData()
        with open(self.xulePath, encoding="utf-8", errors="replace") as fh:
            text = fh.read()
        dependencies: dict[str, dict[str, str]] = {}
        gateIds: set[str] = set()
        skipped: list[SkippedBlock] = []
        for block in splitBlocks(text):
            rule = classifyBlock(block)
            if isinstance(rule, SkippedBlock):
                skipped.append(rule)
                if self.options.debugRules:
                    SurveyLog.debug("amsfsurvey:ruleSkipped",
                                    "Rule %(header)s skipped: %(reason)s",
                                    artifact=self.xulePath, header=rule.header, reason=rule.reason)
                continue
            dependencies.setdefault(rule.controlledId, {})[rule.controllingId] = rule.requiredValue
            gateIds.add(rule.controllingId)
        return RuleData(dependencies=dependencies, gateIds=frozenset(gateIds), skipped=tuple(skipped))
