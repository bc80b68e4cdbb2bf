"""Shared fixtures."""
import pytest

from pslsplit.core.extractor import Extractor
from pslsplit.models import SuffixListConfig, TextSource


PSL_TEXT = """\
// Test ruleset in PSL format.

// ===BEGIN ICANN DOMAINS===
com
uk
co.uk
cn
edu.cn
公司.cn
jp
*.kawasaki.jp
!city.kawasaki.jp
*.ck
!www.ck
// ===END ICANN DOMAINS===

// ===BEGIN PRIVATE DOMAINS===
github.io
blogspot.com
// ===END PRIVATE DOMAINS===
"""


@pytest.fixture
def psl_text():
    return PSL_TEXT


@pytest.fixture
def text_config():
    return SuffixListConfig(primary=TextSource(PSL_TEXT))


@pytest.fixture
def extractor(text_config):
    return Extractor(text_config, unicode_output=False)


@pytest.fixture
def unicode_extractor(text_config):
    return Extractor(text_config, unicode_output=True)
