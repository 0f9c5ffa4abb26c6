from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class CreditorClass(str, Enum):
    I_LABOR = "I_LABOR"
    II_SECURED = "II_SECURED"
    III_UNSECURED = "III_UNSECURED"
    IV_SMALL_BUSINESS = "IV_SMALL_BUSINESS"


class Vote(str, Enum):
    FAVOR = "FAVOR"
    AGAINST = "AGAINST"
    ABSTAIN = "ABSTAIN"


class QuorumBasis(str, Enum):
    HEAD = "HEAD"
    HEAD_AND_VALUE = "HEAD_AND_VALUE"


class DscrStatus(str, Enum):
    HEALTHY = "HEALTHY"
    ALERT = "ALERT"
    CRITICAL = "CRITICAL"


# Assembly order used everywhere results are listed.
CLASS_ORDER: Tuple[CreditorClass, ...] = (
    CreditorClass.I_LABOR,
    CreditorClass.II_SECURED,
    CreditorClass.III_UNSECURED,
    CreditorClass.IV_SMALL_BUSINESS,
)

# Lei 11.101/2005, art. 45.
QUORUM_BASIS: Dict[CreditorClass, QuorumBasis] = {
    CreditorClass.I_LABOR: QuorumBasis.HEAD,
    CreditorClass.II_SECURED: QuorumBasis.HEAD_AND_VALUE,
    CreditorClass.III_UNSECURED: QuorumBasis.HEAD_AND_VALUE,
    CreditorClass.IV_SMALL_BUSINESS: QuorumBasis.HEAD,
}

QUORUM_RULE_TEXT: Dict[QuorumBasis, str] = {
    QuorumBasis.HEAD: "Art. 45, §2º: simple majority of present creditors by head",
    QuorumBasis.HEAD_AND_VALUE: (
        "Art. 45, §1º: majority of present credit value AND simple majority "
        "of present creditors by head"
    ),
}

CLASS_LABELS: Dict[CreditorClass, str] = {
    CreditorClass.I_LABOR: "Class I (labor)",
    CreditorClass.II_SECURED: "Class II (secured)",
    CreditorClass.III_UNSECURED: "Class III (unsecured)",
    CreditorClass.IV_SMALL_BUSINESS: "Class IV (small business)",
}
