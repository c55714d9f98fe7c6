"""Typed response models."""

from .base import BaseResponse
from .credit import CreditUsage
from .email import EmailValidation
from .ip import IPReputation
from .leak import LeakCheck
from .lists import CountryList, EntryList, ListResponse, RequestList
from .malware import MalwareCheck
from .phone import PhoneValidation
from .transaction import FraudReport, Transaction
from .url import URLScan

__all__ = [
    "BaseResponse",
    "CountryList",
    "CreditUsage",
    "EmailValidation",
    "EntryList",
    "FraudReport",
    "IPReputation",
    "LeakCheck",
    "ListResponse",
    "MalwareCheck",
    "PhoneValidation",
    "RequestList",
    "Transaction",
    "URLScan",
]
