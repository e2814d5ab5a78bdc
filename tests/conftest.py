"""Shared pytest fixtures for the Khaos analyzer test suite.

Provides reusable fixtures for:
- Analyzer instances wired to the default taxonomy
- A deliberately cyclic taxonomy for cycle detection
- Provider doubles (scripted, failing, misbehaving)
- Sample descriptions and component source code
- A recording console for output assertions
"""

from __future__ import annotations

import textwrap
from typing import Any, Optional
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from khaos.analyzers.classifier import LayerClassifier
from khaos.analyzers.code_analyzer import CodeAnalyzer
from khaos.analyzers.dependencies import DependencyAnalyzer
from khaos.analyzers.models import LayerId, PartialAnalysis
from khaos.analyzers.naming import NamingSuggester
from khaos.analyzers.taxonomy import DEFAULT_TAXONOMY, LayerProfile, Taxonomy


# ---------------------------------------------------------------------------
# Analyzers
# ---------------------------------------------------------------------------

@pytest.fixture
def taxonomy() -> Taxonomy:
    return DEFAULT_TAXONOMY


@pytest.fixture
def classifier(taxonomy: Taxonomy) -> LayerClassifier:
    return LayerClassifier(taxonomy)


@pytest.fixture
def dependency_analyzer(taxonomy: Taxonomy) -> DependencyAnalyzer:
    return DependencyAnalyzer(taxonomy)


@pytest.fixture
def naming_suggester(taxonomy: Taxonomy) -> NamingSuggester:
    return NamingSuggester(taxonomy)


@pytest.fixture
def code_analyzer(taxonomy: Taxonomy) -> CodeAnalyzer:
    return CodeAnalyzer(taxonomy)


@pytest.fixture
def cyclic_taxonomy() -> Taxonomy:
    """Default taxonomy with the cycle atom -> util -> molecule -> atom."""
    profiles = {p.layer: p for p in DEFAULT_TAXONOMY}
    profiles[LayerId.ATOM] = profiles[LayerId.ATOM].model_copy(
        update={"allowed_dependencies": (LayerId.UTIL,)}
    )
    profiles[LayerId.UTIL] = profiles[LayerId.UTIL].model_copy(
        update={"allowed_dependencies": (LayerId.MOLECULE,)}
    )
    return Taxonomy(profiles)


@pytest.fixture
def util_particle_taxonomy() -> Taxonomy:
    """Default taxonomy with the cycle util -> particle -> util."""
    profiles = {p.layer: p for p in DEFAULT_TAXONOMY}
    profiles[LayerId.UTIL] = profiles[LayerId.UTIL].model_copy(
        update={"allowed_dependencies": (LayerId.PARTICLE,)}
    )
    return Taxonomy(profiles)


@pytest.fixture
def tiny_taxonomy() -> Taxonomy:
    """Two-layer taxonomy for tests that need hand-computable scores."""
    return Taxonomy([
        LayerProfile(layer=LayerId.ATOM, keywords=("button",), weight=1.0),
        LayerProfile(layer=LayerId.MOLECULE, keywords=("modal",), weight=2.0,
                     allowed_dependencies=(LayerId.ATOM,)),
    ])


# ---------------------------------------------------------------------------
# Provider doubles
# ---------------------------------------------------------------------------

class ScriptedProvider:
    """Analysis provider returning a fixed :class:`PartialAnalysis`."""

    name = "scripted"

    def __init__(self, analysis: PartialAnalysis) -> None:
        self.analysis = analysis
        self.calls: list[tuple[str, Optional[dict[str, Any]]]] = []

    def analyze_description(
        self, text: str, context: Optional[dict[str, Any]] = None
    ) -> PartialAnalysis:
        self.calls.append((text, context))
        return self.analysis


@pytest.fixture
def scripted_provider():
    """Factory building a :class:`ScriptedProvider` from keyword arguments.

    Usage::

        def test_merge(scripted_provider):
            provider = scripted_provider(layer="organism", confidence=0.99)
    """
    def factory(**fields: Any) -> ScriptedProvider:
        return ScriptedProvider(PartialAnalysis(**fields))

    return factory


@pytest.fixture
def failing_provider() -> MagicMock:
    provider = MagicMock()
    provider.name = "failing"
    provider.analyze_description.side_effect = RuntimeError("provider offline")
    return provider


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_descriptions() -> dict[str, str]:
    return {
        "button": "um botão reutilizável",
        "modal": "modal de confirmação com formulário",
        "login": "tela de login com chamada de api",
        "variants": "botão com variantes de cor",
        "header": "header com navegação e busca",
    }


@pytest.fixture
def atom_code() -> str:
    return textwrap.dedent("""\
        import React, { FC } from 'react';
        import { TWithTestID } from '@types/global';

        type ButtonProps = TWithTestID & { label: string };

        // Simple presentational button
        export const ButtonAtom: FC<ButtonProps> = ({ label, testID }) => {
          return <button data-testid={testID}>{label}</button>;
        };
    """)


@pytest.fixture
def molecule_code() -> str:
    return textwrap.dedent("""\
        import React, { FC } from 'react';
        import { ButtonAtom } from '../../atoms/button';
        import { useModalUseCase } from './modal.use-case';

        export const ModalMolecule: FC<ModalProps> = (props) => {
          const { open, close } = useModalUseCase(props);
          return <div testID={props.testID}><ButtonAtom label="ok" onClick={close} /></div>;
        };
    """)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@pytest.fixture
def recording_console():
    """Replace the shared console with a recording one.

    Yields the recording :class:`Console`; use ``export_text()`` to assert on
    what was printed.
    """
    recorder = Console(record=True, width=200, force_terminal=False)
    with patch("khaos.utils.console", recorder), patch("khaos.reporter.console", recorder):
        yield recorder
