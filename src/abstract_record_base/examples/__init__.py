"""Sample records built on the framework."""

from abstract_record_base.examples.full_name import FullName, FullNameDTO
from abstract_record_base.examples.password import Password, PasswordDTO
from abstract_record_base.examples.phone import Phone, PhoneDTO, PhoneWithDTO
from abstract_record_base.examples.user_state import UserState, UserStateDTO

__all__ = [
    "FullName",
    "FullNameDTO",
    "Password",
    "PasswordDTO",
    "Phone",
    "PhoneDTO",
    "PhoneWithDTO",
    "UserState",
    "UserStateDTO",
]
