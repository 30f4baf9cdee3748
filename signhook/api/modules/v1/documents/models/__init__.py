from .document_model import Document, DocumentData, DocumentDataType, DocumentStatus
from .field_model import DocumentField, FieldType
from .provisioned_session_model import ProvisionedCheckoutSession
from .recipient_model import ReadStatus, Recipient, SendStatus, SigningStatus
from .signature_model import Signature

__all__ = [
    "Document",
    "DocumentData",
    "DocumentDataType",
    "DocumentStatus",
    "DocumentField",
    "FieldType",
    "ProvisionedCheckoutSession",
    "Recipient",
    "ReadStatus",
    "SendStatus",
    "SigningStatus",
    "Signature",
]
