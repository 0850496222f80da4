"""
IFRSConfig schema.

The frozen runtime form of ``ifrs.yaml``: labels for account and
transaction types, the ordered account types of every statement section,
and statement titles.  All mappings are read-only proxies; nothing in the
process can mutate the table after it is loaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ifrs_kernel.domain.records import AccountType, Section, TransactionType
from ifrs_kernel.exceptions import MissingSectionMapping


@dataclass(frozen=True)
class IFRSConfig:
    """Immutable presentation and classification table."""

    statement_titles: Mapping[str, str]
    account_labels: Mapping[AccountType, str]
    transaction_labels: Mapping[TransactionType, str]
    section_labels: Mapping[Section, str]
    sections: Mapping[Section, tuple[AccountType, ...]]
    checksum: str = ""

    def __post_init__(self) -> None:
        for name in (
            "statement_titles",
            "account_labels",
            "transaction_labels",
            "section_labels",
            "sections",
        ):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    def account_types(self, section: Section) -> tuple[AccountType, ...]:
        return self.sections.get(section, ())

    def section_for(self, account_type: AccountType) -> Section:
        """Section an account type is reported under."""
        for section, types in self.sections.items():
            if account_type in types:
                return section
        raise MissingSectionMapping([account_type.value])

    def account_label(self, account_type: AccountType | str) -> str:
        if isinstance(account_type, AccountType):
            return self.account_labels.get(account_type, account_type.value)
        return self.statement_titles.get(account_type, account_type)

    def transaction_label(self, transaction_type: TransactionType) -> str:
        return self.transaction_labels.get(transaction_type, transaction_type.value)

    def section_label(self, section: Section) -> str:
        return self.section_labels.get(section, section.value)

    def statement_title(self, statement: str) -> str:
        return self.statement_titles.get(statement, statement)

    def validate(self) -> None:
        """
        Every account type maps to exactly one section.

        Raises:
            MissingSectionMapping: naming the unmapped or doubly mapped types.
        """
        seen: dict[AccountType, int] = {t: 0 for t in AccountType}
        for types in self.sections.values():
            for account_type in types:
                seen[account_type] += 1

        missing = [t.value for t, n in seen.items() if n == 0]
        if missing:
            raise MissingSectionMapping(missing)
        duplicated = [t.value for t, n in seen.items() if n > 1]
        if duplicated:
            raise MissingSectionMapping(
                duplicated, reason="is mapped to more than one section",
            )
