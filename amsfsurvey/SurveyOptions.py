'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any

import regex as re
import yaml

from amsfsurvey.SurveyErrors import ConfigurationError, MalformedArtifact

TAXONOMY_CONFIG_FILE = "taxonomy.yml"


@dataclass(frozen=True)
class TaxonomyOptions:
    """
        Options governing how the artifacts of one taxonomy directory are read and how its
        instance documents are addressed. Defaults match the AMSF Strix taxonomies; a taxonomy.yml
        in the taxonomy directory overrides them (see fromTaxonomyDirectory).
        ConfigurationError is raised if a pattern does not compile or a limit is not positive.
    """
    schemaUrl: str | None = None
    wirePrefix: str = "strix"
    entityScheme: str = "https://amlcft.amsf.mc"
    dimensionalAbstractPattern: str = r"Abstract_aAC$"
    locatorPrefix: str = "strix_"
    memberSuffixPattern: str = r"[A-Z]{2}$"
    maxFields: int = 10_000
    defaultLocale: str = "fr"
    debugRules: bool = False
    dimensionalAbstractRegex: re.Pattern[str] = field(init=False, repr=False, compare=False)
    memberSuffixRegex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for attr, pattern in (("dimensionalAbstractRegex", self.dimensionalAbstractPattern),
                              ("memberSuffixRegex", self.memberSuffixPattern)):
            try:
                object.__setattr__(self, attr, re.compile(pattern))
            except (re.error, TypeError) as err:
                raise ConfigurationError("Invalid pattern {0!r}: {1}".format(pattern, err)) from err
        if not isinstance(self.maxFields, int) or self.maxFields <= 0:
            raise ConfigurationError("maxFields must be a positive integer, got {0!r}".format(self.maxFields))
        if not self.wirePrefix:
            raise ConfigurationError("wirePrefix must not be empty")

    @classmethod
    def fromTaxonomyDirectory(cls, taxonomyPath: str, **overrides: Any) -> TaxonomyOptions:
        configPath = os.path.join(taxonomyPath, TAXONOMY_CONFIG_FILE)
        settings = loadTaxonomyConfig(configPath) if os.path.exists(configPath) else {}
        settings.update(overrides)
        return cls(**settings)


# taxonomy.yml keys and the option each one sets
CONFIG_KEYS = {
    "schema_url": "schemaUrl",
    "wire_prefix": "wirePrefix",
    "entity_scheme": "entityScheme",
    "dimensional_abstract_pattern": "dimensionalAbstractPattern",
    "locator_prefix": "locatorPrefix",
    "member_suffix_pattern": "memberSuffixPattern",
    "max_fields": "maxFields",
    "default_locale": "defaultLocale",
}


def loadTaxonomyConfig(configPath: str) -> dict[str, Any]:
    try:
        with open(configPath, encoding="utf-8") as fh:
            document = yaml.safe_load(fh)
    except yaml.YAMLError as err:
        raise MalformedArtifact(configPath, err) from err
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise MalformedArtifact(configPath, "expected a mapping at the document root")
    unknownKeys = sorted(str(key) for key in document if key not in CONFIG_KEYS)
    if unknownKeys:
        raise ConfigurationError("Unknown keys in {0}: {1}".format(configPath, ", ".join(unknownKeys)))
    return {CONFIG_KEYS[key]: value for key, value in document.items()}


@dataclass(frozen=True)
class GeneratorOptions:
    pretty: bool = False
    includeEmpty: bool = False
    monetaryUnit: str = "EUR"

    @classmethod
    def names(cls) -> set[str]:
        return {f.name for f in fields(cls)}
