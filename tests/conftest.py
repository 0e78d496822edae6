from pathlib import Path

import pytest


IO_SOCKET_SSL_YAML = """\
---
- affected_versions: "<1.35"
  cves:
    - CVE-2010-4334
  description: >
    The IO::Socket::SSL module 1.35 for Perl, when verify_mode is not
    VERIFY_NONE, fails open to VERIFY_NONE instead of throwing an
    error when a ca_file/ca_path cannot be verified.
  distribution: IO-Socket-SSL
  fixed_versions: ~
  id: CPANSA-IO-Socket-SSL-2010-4334
  references:
    - http://osvdb.org/69626
    - http://bugs.debian.org/cgi-bin/bugreport.cgi?bug=606058
  reported: 2011-01-14
  severity: ~
- affected_versions: ">=1.14,<=1.15"
  cves:
    - CVE-2009-3024
  description: >
    The verify_hostname_of_cert function only matches the prefix of a
    hostname when no wildcard is used.
  distribution: IO-Socket-SSL
  fixed_versions: ~
  id: CPANSA-IO-Socket-SSL-2009-3024
  references:
    - http://www.openwall.com/lists/oss-security/2009/08/31/4
  reported: 2009-08-31
  severity: ~
"""

BROKEN_YAML = """\
---
- affected_versions: "<1.0"
  distribution: Broken-Dist
  description: no id here
- id: CPANSA-Broken-Dist-2020-0001
  distribution: Broken-Dist
  affected_versions: "=>1.0"
"""

PACKAGES_TXT = """\
File:         02packages.details.txt
URL:          http://www.perl.com/CPAN/modules/02packages.details.txt
Line-Count:   4

IO::Socket::SSL                    2.074  S/SU/SULLR/IO-Socket-SSL-2.074.tar.gz
IO::Socket::SSL::Utils             2.014  S/SU/SULLR/IO-Socket-SSL-2.074.tar.gz
Net::SSLeay                         1.92  C/CH/CHRISN/Net-SSLeay-1.92.tar.gz
Broken::Dist                       undef  A/AU/AUTHOR/Broken-Dist-1.0.tar.gz
"""


@pytest.fixture
def advisories_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "cpansa"
    directory.mkdir()
    (directory / "CPANSA-IO-Socket-SSL.yml").write_text(IO_SOCKET_SSL_YAML, encoding="utf-8")
    return directory


@pytest.fixture
def broken_advisories_dir(advisories_dir: Path) -> Path:
    (advisories_dir / "CPANSA-Broken-Dist.yml").write_text(BROKEN_YAML, encoding="utf-8")
    (advisories_dir / "CPANSA-Unreadable.yml").write_text("- id: [unclosed\n", encoding="utf-8")
    return advisories_dir


@pytest.fixture
def packages_file(tmp_path: Path) -> Path:
    path = tmp_path / "02packages.details.txt"
    path.write_text(PACKAGES_TXT, encoding="utf-8")
    return path
