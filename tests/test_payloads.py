import base64

from mpesa.payloads import B2B, B2C, C2B, BalanceInquiry, C2BRegisterURL, Reversal, STKPush, STKPushQuery


def test_stk_push_for_paybill_builds_gateway_body():
    push = STKPush.for_paybill(
        shortcode="174379",
        passkey="secret",
        phone="254708374149",
        amount=10.4,
        callback_url="https://example.test/callback",
        account_reference="ORDER-1",
        transaction_desc="Payment",
        timestamp="20240102030405",
    )

    payload = push.as_payload()

    assert payload == {
        "BusinessShortCode": "174379",
        "Password": base64.b64encode(b"174379secret20240102030405").decode(),
        "Timestamp": "20240102030405",
        "TransactionType": "CustomerPayBillOnline",
        "Amount": 10,
        "PartyA": "254708374149",
        "PartyB": "174379",
        "PhoneNumber": "254708374149",
        "CallBackURL": "https://example.test/callback",
        "AccountReference": "ORDER-1",
        "TransactionDesc": "Payment",
    }


def test_stk_push_query_for_checkout():
    payload = STKPushQuery.for_checkout("174379", "secret", "ws_CO_1", timestamp="20240102030405").as_payload()

    assert set(payload) == {"BusinessShortCode", "Password", "Timestamp", "CheckoutRequestID"}
    assert payload["CheckoutRequestID"] == "ws_CO_1"


def test_optional_fields_are_omitted():
    payload = C2B(short_code="600000", amount=5, msisdn="254708374149").as_payload()

    assert payload == {
        "ShortCode": "600000",
        "CommandID": "CustomerPayBillOnline",
        "Amount": 5,
        "Msisdn": "254708374149",
    }


def test_transfer_records_use_daraja_key_names():
    assert set(B2C().as_payload()) == {"CommandID"}
    assert "RecieverIdentifierType" in B2B(amount=1).as_payload()
    assert Reversal(transaction_id="OEI2AK4Q16").as_payload()["TransactionID"] == "OEI2AK4Q16"
    assert BalanceInquiry(party_a="600000").as_payload() == {
        "CommandID": "AccountBalance",
        "PartyA": "600000",
        "IdentifierType": "4",
    }
    assert C2BRegisterURL(confirmation_url="https://c", validation_url="https://v").as_payload() == {
        "ResponseType": "Completed",
        "ConfirmationURL": "https://c",
        "ValidationURL": "https://v",
    }
