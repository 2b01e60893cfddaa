from __future__ import annotations

from copy import deepcopy

import pytest

from herd_engine.defaults import DEFAULTS
from herd_engine.schema import ParameterSet, params_from_dict


@pytest.fixture
def base_params() -> ParameterSet:
    params, _, _ = params_from_dict(deepcopy(DEFAULTS))
    return params
