"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path


@pytest.fixture
def sample_report():
    """A single-login report as written by `symaccess list logins -v`."""
    return '''
Symmetrix ID            : 000197901042
Director Identification : FA-1D
Director Port           : 004
WWN Port Name           : 50000973b0104804

Originator Node wwn : 200000051efd0ba0
Originator Port wwn : 100000051efd0ba0
User-generated Name : /
FCID                : 798d40
Logged In           : No
On Fabric           : Yes
Last Active Log-In  : 11:34:07 PM on Wed May 25,2022
'''


@pytest.fixture
def multi_login_report():
    """One array/director header followed by five login blocks."""
    blocks = [
        '''
Symmetrix ID            : 000197901043
Director Identification : FA-2D
Director Port           : 010
WWN Port Name           : 50000973b010c809
'''
    ]
    for i in range(5):
        blocks.append(f'''
    Originator Node wwn : 20000090fa00000{i}
    Originator Port wwn : 10000090fa00000{i}
    User-generated Name : host0{i}/10000090fa00000{i}
    FCID                : 7a0{i}00
    Logged In           : Yes
    On Fabric           : Yes
    Last Active Log-In  : 0{i}:15:00 AM on Thu May 26,2022
''')
    return "\n".join(blocks)


@pytest.fixture
def sample_symcfg_output():
    """Sample output from `symcfg list`."""
    return '''
                                S Y M M E T R I X

                                       Mcode    Cache      Num Phys  Num Symm
    SymmID       Attachment  Model     Version  Size (MB)  Devices   Devices

    000197901042 Local       PowerMax_2000 5978  1048576        12      3456
    000197901043 Remote      VMAX250F  5978       786432         0      1234
    000195700123 Local       DMX4-24   5773       131072        64      8000
'''


@pytest.fixture
def write_report(tmp_path):
    """Factory writing report text to tmp_path and returning the path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run from an empty directory with no config files in reach."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("SYMLOGINS_CONFIG", raising=False)
    return tmp_path
