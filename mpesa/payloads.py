"""
Request bodies for the Daraja endpoints.

Each record is a flat dataclass whose fields map one to one onto the JSON
keys documented by Safaricom (the ``daraja`` metadata of each field).
``as_payload()`` returns the dict that is sent over the wire; fields left
as ``None`` are omitted.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Union

from .utils import generate_password, generate_timestamp


def _key(name, default=None):
    return field(default=default, metadata={"daraja": name})


class DarajaPayload:
    def as_payload(self) -> Dict[str, Any]:
        payload = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                payload[f.metadata.get("daraja", f.name)] = value
        return payload


@dataclass
class STKPush(DarajaPayload):
    business_short_code: Union[str, int] = _key("BusinessShortCode")
    password: str = _key("Password")
    timestamp: str = _key("Timestamp")
    amount: Union[int, str] = _key("Amount")
    party_a: str = _key("PartyA")
    party_b: Union[str, int] = _key("PartyB")
    phone_number: str = _key("PhoneNumber")
    callback_url: str = _key("CallBackURL")
    account_reference: str = _key("AccountReference")
    transaction_desc: str = _key("TransactionDesc")
    transaction_type: str = _key("TransactionType", "CustomerPayBillOnline")

    @classmethod
    def for_paybill(cls, shortcode, passkey, phone, amount, callback_url,
                    account_reference, transaction_desc, timestamp=None):
        """Build a Lipa na M-Pesa Online request with a fresh password."""
        timestamp = timestamp or generate_timestamp()
        return cls(
            business_short_code=shortcode,
            password=generate_password(shortcode, passkey, timestamp),
            timestamp=timestamp,
            amount=int(round(float(amount))),
            party_a=phone,
            party_b=shortcode,
            phone_number=phone,
            callback_url=callback_url,
            account_reference=account_reference,
            transaction_desc=transaction_desc,
        )


@dataclass
class STKPushQuery(DarajaPayload):
    business_short_code: Union[str, int] = _key("BusinessShortCode")
    password: str = _key("Password")
    timestamp: str = _key("Timestamp")
    checkout_request_id: str = _key("CheckoutRequestID")

    @classmethod
    def for_checkout(cls, shortcode, passkey, checkout_request_id, timestamp=None):
        timestamp = timestamp or generate_timestamp()
        return cls(
            business_short_code=shortcode,
            password=generate_password(shortcode, passkey, timestamp),
            timestamp=timestamp,
            checkout_request_id=checkout_request_id,
        )


@dataclass
class C2BRegisterURL(DarajaPayload):
    short_code: str = _key("ShortCode")
    response_type: str = _key("ResponseType", "Completed")
    confirmation_url: str = _key("ConfirmationURL")
    validation_url: str = _key("ValidationURL")


@dataclass
class C2B(DarajaPayload):
    short_code: str = _key("ShortCode")
    command_id: str = _key("CommandID", "CustomerPayBillOnline")
    amount: Union[int, str] = _key("Amount")
    msisdn: str = _key("Msisdn")
    bill_ref_number: Optional[str] = _key("BillRefNumber")


@dataclass
class B2C(DarajaPayload):
    initiator_name: str = _key("InitiatorName")
    security_credential: str = _key("SecurityCredential")
    command_id: str = _key("CommandID", "BusinessPayment")
    amount: Union[int, str] = _key("Amount")
    party_a: str = _key("PartyA")
    party_b: str = _key("PartyB")
    remarks: str = _key("Remarks")
    queue_timeout_url: str = _key("QueueTimeOutURL")
    result_url: str = _key("ResultURL")
    occasion: Optional[str] = _key("Occasion")


@dataclass
class B2B(DarajaPayload):
    initiator: str = _key("Initiator")
    security_credential: str = _key("SecurityCredential")
    command_id: str = _key("CommandID", "BusinessPayBill")
    sender_identifier_type: str = _key("SenderIdentifierType", "4")
    # Daraja spells this key "Reciever".
    receiver_identifier_type: str = _key("RecieverIdentifierType", "4")
    amount: Union[int, str] = _key("Amount")
    party_a: str = _key("PartyA")
    party_b: str = _key("PartyB")
    account_reference: Optional[str] = _key("AccountReference")
    remarks: str = _key("Remarks")
    queue_timeout_url: str = _key("QueueTimeOutURL")
    result_url: str = _key("ResultURL")


@dataclass
class Reversal(DarajaPayload):
    initiator: str = _key("Initiator")
    security_credential: str = _key("SecurityCredential")
    command_id: str = _key("CommandID", "TransactionReversal")
    transaction_id: str = _key("TransactionID")
    amount: Union[int, str] = _key("Amount")
    receiver_party: str = _key("ReceiverParty")
    receiver_identifier_type: str = _key("RecieverIdentifierType", "11")
    result_url: str = _key("ResultURL")
    queue_timeout_url: str = _key("QueueTimeOutURL")
    remarks: str = _key("Remarks")
    occasion: Optional[str] = _key("Occasion")


@dataclass
class BalanceInquiry(DarajaPayload):
    initiator: str = _key("Initiator")
    security_credential: str = _key("SecurityCredential")
    command_id: str = _key("CommandID", "AccountBalance")
    party_a: str = _key("PartyA")
    identifier_type: str = _key("IdentifierType", "4")
    remarks: str = _key("Remarks")
    queue_timeout_url: str = _key("QueueTimeOutURL")
    result_url: str = _key("ResultURL")
