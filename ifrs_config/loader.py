"""
Configuration Loader (``ifrs_config.loader``).

Responsibility
--------------
Parses ``ifrs.yaml`` (or an override file) into a validated, frozen
``IFRSConfig``.  Runtime code obtains configuration through
``ifrs_config.get_config()`` only.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Unknown account/transaction/section names  -> ``ValueError``.
* Account type without exactly one section  -> ``MissingSectionMapping``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from ifrs_config.schema import IFRSConfig
from ifrs_kernel.domain.records import AccountType, Section, TransactionType


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 of the parsed configuration."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_config(data: dict[str, Any]) -> IFRSConfig:
    """Build and validate an IFRSConfig from a parsed YAML mapping."""
    sections: dict[Section, tuple[AccountType, ...]] = {}
    section_labels: dict[Section, str] = {}
    for name, entry in data["sections"].items():
        section = Section(name)
        section_labels[section] = entry.get("label", name)
        sections[section] = tuple(AccountType(t) for t in entry["account_types"])

    config = IFRSConfig(
        statement_titles=dict(data["statements"]),
        account_labels={
            AccountType(k): v for k, v in data["accounts"].items()
        },
        transaction_labels={
            TransactionType(k): v for k, v in data["transactions"].items()
        },
        section_labels=section_labels,
        sections=sections,
        checksum=compute_checksum(data),
    )
    config.validate()
    return config


def load_config(path: Path) -> IFRSConfig:
    """Load and validate a configuration file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return parse_config(data)
