"""
Boundary operations of the viability engine.

Callers (an RPC router, a notebook, a CLI) pass either engine models or plain
mappings decoded from JSON. Input is validated here once; pydantic failures
surface as core.errors.ValidationError like every other rejected input.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.config import DEFAULT_CONFIG, EngineConfig
from core.errors import ValidationError
from engine.params import ProjectionParams
from engine.projection import Projection
from engine.projection import run_projection as _run_projection
from sensitivity.analyzer import SensitivityReport
from sensitivity.analyzer import run_sensitivity as _run_sensitivity
from stress import StressTestReport
from stress import run_stress_test as _run_stress_test
from voting.models import Creditor, VoteOverride, VotingResult
from voting.simulator import simulate_voting as _simulate_voting

logger = logging.getLogger(__name__)

CreditorInput = Union[Creditor, Mapping[str, Any]]
OverrideInput = Union[VoteOverride, Mapping[str, Any]]
ParamsInput = Union[ProjectionParams, Mapping[str, Any]]


def _coerce(model: type, data: Any, what: str) -> BaseModel:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        errors = [
            f"{what}: {'.'.join(str(p) for p in e['loc']) or '<root>'}: {e['msg']}"
            for e in exc.errors()
        ]
        raise ValidationError("; ".join(errors), errors=errors) from exc


def _coerce_creditors(creditors: Sequence[CreditorInput]) -> List[Creditor]:
    return [
        _coerce(Creditor, c, f"creditor[{c.get('id', i) if isinstance(c, Mapping) else i}]")
        for i, c in enumerate(creditors)
    ]


def simulate_voting(
    creditors: Sequence[CreditorInput],
    overrides: Optional[Mapping[str, OverrideInput]] = None,
    *,
    no_worse_than_liquidation: bool = True,
) -> VotingResult:
    typed = {
        cid: _coerce(VoteOverride, o, f"override[{cid}]")
        for cid, o in (overrides or {}).items()
    }
    return _simulate_voting(
        _coerce_creditors(creditors),
        typed,
        no_worse_than_liquidation=no_worse_than_liquidation,
    )


def run_projection(params: ParamsInput, config: EngineConfig = DEFAULT_CONFIG) -> Projection:
    return _run_projection(_coerce(ProjectionParams, params, "params"), config)


def run_stress_test(params: ParamsInput, config: EngineConfig = DEFAULT_CONFIG) -> StressTestReport:
    return _run_stress_test(_coerce(ProjectionParams, params, "params"), config)


def run_sensitivity(
    params: ParamsInput,
    variations: Optional[Sequence[float]] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> SensitivityReport:
    return _run_sensitivity(_coerce(ProjectionParams, params, "params"), variations, config)
