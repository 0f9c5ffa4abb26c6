"""Builders shared by the test modules."""

from core.schema import CreditorClass
from voting.models import Creditor

I = CreditorClass.I_LABOR
II = CreditorClass.II_SECURED
III = CreditorClass.III_UNSECURED
IV = CreditorClass.IV_SMALL_BUSINESS


def make_creditor(cid, cls, value, vote=None, present=True, name=None):
    return Creditor(
        id=cid,
        name=name or f"Creditor {cid}",
        creditor_class=cls,
        value=value,
        vote=vote,
        present_at_assembly=present,
    )
