import pytest

from app.config.settings import DEFAULT_PARTNERS
from app.modules.transactions.repository import PartnerDirectory, PartnerRecord


def test_from_config():
    directory = PartnerDirectory.from_config(DEFAULT_PARTNERS)

    assert len(directory) == 2
    assert directory.get_by_ref_no("FG-00002") == PartnerRecord(
        partner_ref_no="FG-00002", partner_key="FAKEPEOPLE", password="FAKEPASSWORD4578"
    )


def test_unknown_ref_no(directory):
    assert directory.get_by_ref_no("FG-00003") is None


def test_directory_is_read_only(directory):
    with pytest.raises(TypeError):
        directory.partners["FG-00003"] = PartnerRecord("FG-00003", "KEY", "PASSWORD")


def test_records_are_immutable(directory):
    record = directory.get_by_ref_no("FG-00001")
    with pytest.raises(AttributeError):
        record.password = "changed"
