from unittest.mock import MagicMock

from app.modules.transactions.service import TransactionsService

from tests.helpers import build_request, encode_password


def test_successful_transaction(transactions_service):
    response = transactions_service.process_transaction(build_request())

    assert response.result == 1
    assert response.resultmessage is None
    assert response.totalamount == 1000
    assert response.totaldiscount == 0
    assert response.finalamount == 1000


def test_successful_transaction_with_discount(transactions_service):
    response = transactions_service.process_transaction(build_request(items=None, totalamount=99700))

    assert response.result == 1
    assert response.totaldiscount == 10967
    assert response.finalamount == 88733
    assert response.totaldiscount + response.finalamount == response.totalamount


def test_missing_request(transactions_service):
    response = transactions_service.process_transaction(None)
    assert response.result == 0
    assert response.resultmessage == "Request is Required."
    assert response.totalamount is None


def test_validation_failure(transactions_service):
    response = transactions_service.process_transaction(build_request(totalamount=999))
    assert (response.result, response.resultmessage) == (0, "Invalid Total Amount.")


def test_unknown_partner_is_access_denied(transactions_service):
    response = transactions_service.process_transaction(build_request(partnerrefno="FG-99999"))
    assert (response.result, response.resultmessage) == (0, "Access Denied!")


def test_wrong_password_is_access_denied(transactions_service):
    response = transactions_service.process_transaction(
        build_request(partnerpassword=encode_password("WRONGPASSWORD"))
    )
    assert response.resultmessage == "Access Denied!"


def test_invalid_signature(transactions_service):
    response = transactions_service.process_transaction(build_request(sig="bm90LWEtc2lnbmF0dXJl"))
    assert (response.result, response.resultmessage) == (0, "Invalid signature!")


def test_authentication_runs_before_signature(transactions_service):
    response = transactions_service.process_transaction(
        build_request(partnerrefno="FG-99999", sig="bm90LWEtc2lnbmF0dXJl")
    )
    assert response.resultmessage == "Access Denied!"


def stub_service(**overrides):
    stages = {
        "validation_service": MagicMock(),
        "partner_auth_service": MagicMock(),
        "signature_service": MagicMock(),
        "discount_service": MagicMock(),
    }
    stages.update(overrides)
    return TransactionsService(**stages), stages


def test_stages_short_circuit(validation_service):
    service, stages = stub_service(validation_service=validation_service)

    response = service.process_transaction(build_request(sig=""))

    assert response.resultmessage == "sig is Required."
    stages["partner_auth_service"].validate_partner.assert_not_called()
    stages["signature_service"].validate_signature.assert_not_called()
    stages["discount_service"].calculate_discount.assert_not_called()


def test_unverified_request_gets_no_discount(validation_service, partner_auth_service):
    service, stages = stub_service(
        validation_service=validation_service,
        partner_auth_service=partner_auth_service,
    )
    stages["signature_service"].validate_signature.return_value = False

    response = service.process_transaction(build_request())

    assert response.resultmessage == "Invalid signature!"
    stages["discount_service"].calculate_discount.assert_not_called()


def test_internal_error_is_not_leaked(validation_service, partner_auth_service, signature_service, caplog):
    service, stages = stub_service(
        validation_service=validation_service,
        partner_auth_service=partner_auth_service,
        signature_service=signature_service,
    )
    stages["discount_service"].calculate_discount.side_effect = RuntimeError("decimal context exploded")

    response = service.process_transaction(build_request(), request_id="req-1")

    assert response.result == 0
    assert response.resultmessage == "Internal server error occurred"
    assert "decimal context exploded" not in response.model_dump_json()
    assert "req-1" in caplog.text
    assert "decimal context exploded" in caplog.text
