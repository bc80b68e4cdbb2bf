"""ASCII (Punycode) and Unicode conversion of domain names."""
import idna

from pslsplit.core.trie import EXCEPTION_MARKER, WILDCARD


def label_to_ascii(label: str) -> str:
    """Encode one label. ASCII labels are only lower-cased."""
    if label.isascii():
        return label.lower()
    return idna.encode(label, uts46=True).decode("ascii")


def domain_to_ascii(domain: str) -> str:
    """
    Convert a domain to its ASCII form.

    Raises:
        idna.IDNAError: If a non-ASCII domain cannot be encoded
    """
    if domain.isascii():
        return domain.lower()
    return idna.encode(domain, uts46=True).decode("ascii")


def rule_to_ascii(rule: str) -> str:
    """
    Convert a PSL rule to ASCII, label by label.

    Wildcard labels pass through and an exception marker is kept.

    Raises:
        idna.IDNAError: If a label cannot be encoded
    """
    if rule.isascii():
        return rule.lower()

    marker = ""
    if rule.startswith(EXCEPTION_MARKER):
        marker, rule = EXCEPTION_MARKER, rule[len(EXCEPTION_MARKER):]
    labels = [
        label if label == WILDCARD else label_to_ascii(label)
        for label in rule.split(".")
    ]
    return marker + ".".join(labels)


def domain_to_unicode(domain: str) -> str:
    """Best-effort conversion back to Unicode; returns the input on failure."""
    if not domain:
        return domain
    try:
        unicode = idna.decode(domain)
    except (idna.IDNAError, UnicodeError):
        return domain
    return unicode or domain
