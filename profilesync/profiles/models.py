"""Record shape and the closed set of well-known profile fields."""

from enum import Enum
from typing import Dict, Tuple


Record = Dict[str, str]


class FieldName(str, Enum):
    """Column names the engine derives, looks up or displays."""

    PROFILE_NAME = "profile_name"
    UUID = "uuid"
    ACC_EMAIL = "acc_email"
    FNAME = "fname"
    LNAME = "lname"
    FULL_NAME = "full_name"
    ADDRESS_ADDRESS = "address_address"
    ADDRESS_CITY = "address_city"
    ADDRESS_STATE = "address_state"
    ADDRESS_ZIP = "address_zip"
    TEL = "tel"
    VISA_NUM = "visa_num"
    VISA_EXP = "visa_exp"
    AMEX_NUM = "amex_num"
    AMEX_EXP = "amex_exp"
    TM_PASS = "tm_pass"


# Order here is the order of projected output.
DISPLAY_FIELDS: Tuple[str, ...] = tuple(
    field.value
    for field in (
        FieldName.PROFILE_NAME,
        FieldName.ACC_EMAIL,
        FieldName.FNAME,
        FieldName.LNAME,
        FieldName.FULL_NAME,
        FieldName.ADDRESS_ADDRESS,
        FieldName.ADDRESS_CITY,
        FieldName.ADDRESS_STATE,
        FieldName.ADDRESS_ZIP,
        FieldName.TEL,
        FieldName.VISA_NUM,
        FieldName.VISA_EXP,
        FieldName.AMEX_NUM,
        FieldName.AMEX_EXP,
    )
)
