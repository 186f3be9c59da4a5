"""Shared pytest setup for parsecomb.

Hypothesis profiles:
    dev      500 examples, the default outside CI
    ci       50 derandomized examples, picked when CI=true
    verbose  100 examples with progress output

HYPOTHESIS_PROFILE=<name> overrides the choice.

Tests marked ``fuzz`` throw large random grammars and inputs at the engine.
They are skipped unless selected with ``pytest -m fuzz``.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

_PHASES = (Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink)
_PROFILES = ("dev", "ci", "verbose")

settings.register_profile("dev", max_examples=500, phases=_PHASES)
settings.register_profile(
    "ci", max_examples=50, phases=_PHASES, derandomize=True, print_blob=True
)
settings.register_profile(
    "verbose", max_examples=100, phases=_PHASES, verbosity=Verbosity.verbose
)


def _select_profile() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE", "")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_select_profile())


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "fuzz: long-running random grammar tests, run with -m fuzz"
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz tests unless the -m expression asks for them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip = pytest.mark.skip(reason="fuzz test: run with pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip)
