from __future__ import annotations

import pytest

HEADER = "oui,isPrivate,companyName,companyAddress,countryCode,assignmentBlockSize,dateCreated,dateUpdated"


def make_row(oui: str, company: str, size: str = "MA-L", private: str = "0") -> str:
    return f'{oui},{private},"{company}","1 Main St",US,{size},2014-07-15,2015-09-13'


@pytest.fixture
def write_table(tmp_path):
    def _write(*rows: str, header: str = HEADER, name: str = "oui.csv"):
        p = tmp_path / name
        p.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return p

    return _write
