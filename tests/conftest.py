import pytest

from app.modules.transactions.repository import PartnerDirectory, PartnerRecord
from app.modules.transactions.validation_service import TransactionValidationService
from app.modules.transactions.partner_auth_service import PartnerAuthService
from app.modules.transactions.signature_service import SignatureService
from app.modules.transactions.discount_service import DiscountCalculatorService
from app.modules.transactions.service import TransactionsService

from tests.helpers import FIXED_NOW


@pytest.fixture
def directory():
    return PartnerDirectory([
        PartnerRecord(partner_ref_no="FG-00001", partner_key="FAKEGOOGLE", password="FAKEPASSWORD1234"),
        PartnerRecord(partner_ref_no="FG-00002", partner_key="FAKEPEOPLE", password="FAKEPASSWORD4578"),
    ])


@pytest.fixture
def validation_service():
    return TransactionValidationService(tolerance_minutes=5, clock=lambda: FIXED_NOW)


@pytest.fixture
def partner_auth_service(directory):
    return PartnerAuthService(directory)


@pytest.fixture
def signature_service():
    return SignatureService()


@pytest.fixture
def discount_service():
    return DiscountCalculatorService()


@pytest.fixture
def transactions_service(validation_service, partner_auth_service, signature_service, discount_service):
    return TransactionsService(
        validation_service=validation_service,
        partner_auth_service=partner_auth_service,
        signature_service=signature_service,
        discount_service=discount_service,
    )
