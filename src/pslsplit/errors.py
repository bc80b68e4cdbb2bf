"""Exceptions raised by the suffix engine."""


class TLDExtractError(Exception):
    """Base error for suffix list and domain failures."""

    prefix = "tldextract error"

    def __init__(self, detail: str):
        super().__init__(f"{self.prefix}: '{detail}'")
        self.detail = detail


class DomainError(TLDExtractError):
    """Malformed or unnormalizable domain input."""

    prefix = "invalid domain"


class SuffixListError(TLDExtractError):
    """No usable ruleset text could be obtained."""

    prefix = "suffix list error"
