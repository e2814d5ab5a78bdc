"""Tests for the naming suggester (khaos.analyzers.naming).

Covers:
- Reference descriptions (button atom, entity)
- Layer-specific conventions (feature prefix, gateway verbs, util verbs)
- Validation (pattern, reserved words, existing names)
- Ranking and confidence
- Provider-supplied concepts and provider failures
"""

from __future__ import annotations

import re
from unittest.mock import MagicMock

import pytest

from khaos.analyzers.models import InvalidLayerError, LayerId, NamingContext
from khaos.analyzers.naming import FALLBACK_NAMES, NamingSuggester, suggest_name
from khaos.analyzers.taxonomy import DEFAULT_TAXONOMY
from khaos.config import NamingConfig

pytestmark = pytest.mark.unit

DASH_CASE = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")


# ---------------------------------------------------------------------------
# Reference descriptions
# ---------------------------------------------------------------------------


class TestReferenceDescriptions:
    def test_button_atom(self, sample_descriptions: dict[str, str]):
        suggestion = suggest_name(sample_descriptions["variants"], "atom")
        assert DASH_CASE.match(suggestion.primary)
        assert "button" in suggestion.primary
        assert suggestion.primary == "button-variantes"

    def test_button_atom_alternatives_and_confidence(self, sample_descriptions: dict[str, str]):
        suggestion = suggest_name(sample_descriptions["variants"], "atom")
        assert suggestion.alternatives == ["variantes", "button"]
        # one of two segments found in the description, plus the 0.2 base
        assert suggestion.confidence == pytest.approx(0.7)

    def test_entity(self, sample_descriptions: dict[str, str]):
        suggestion = suggest_name(sample_descriptions["variants"], LayerId.ENTITY)
        assert re.match(r"^T[A-Z][a-zA-Z]*Entity$", suggestion.primary)
        assert suggestion.primary == "TVariantesEntity"
        assert "TButtonEntity" in suggestion.alternatives

    def test_reasoning_names_layer_and_concepts(self, sample_descriptions: dict[str, str]):
        reasoning = suggest_name(sample_descriptions["variants"], "atom").reasoning
        assert "'button-variantes'" in reasoning
        assert "'atom'" in reasoning
        assert "button" in reasoning


# ---------------------------------------------------------------------------
# Layer conventions
# ---------------------------------------------------------------------------


class TestLayerConventions:
    def test_feature_uses_context_prefix(self):
        suggestion = suggest_name(
            "tela de depósito", "feature", NamingContext(prefix="wallet-")
        )
        assert suggestion.primary.startswith("wallet-")
        assert all(alt.startswith("wallet-") for alt in suggestion.alternatives)

    def test_feature_default_module_prefix(self):
        suggestion = suggest_name("tela de depósito", "feature")
        assert suggestion.primary.startswith("module-")

    def test_feature_configured_module_prefix(self):
        suggester = NamingSuggester(config=NamingConfig(module_prefix="bank"))
        suggestion = suggester.suggest_name("tela de depósito", "feature")
        assert suggestion.primary == "bank-deposito"
        assert all(alt.startswith("bank-") for alt in suggestion.alternatives)

    def test_feature_configured_prefix_trailing_dash(self):
        suggester = NamingSuggester(config=NamingConfig(module_prefix="bank-"))
        candidates = suggester.generate_candidates(["deposit"], LayerId.FEATURE, NamingContext())
        assert candidates == ["bank-deposit"]

    def test_feature_fallback_uses_configured_prefix(self):
        suggester = NamingSuggester(config=NamingConfig(module_prefix="bank"))
        suggestion = suggester.suggest_name("", "feature")
        assert suggestion.primary == "bank-feature"
        assert "layer fallback" in suggestion.reasoning

    def test_feature_fallback_uses_context_prefix(self, naming_suggester: NamingSuggester):
        suggestion = naming_suggester.suggest_name("", "feature", NamingContext(prefix="wallet-"))
        assert suggestion.primary == "wallet-feature"

    def test_naming_drops_auxiliary_verbs(self, naming_suggester: NamingSuggester):
        concepts = naming_suggester.extract_concepts("this button should have icon")
        assert concepts == ["button", "icon"]

    def test_gateway_starts_with_verb(self):
        suggestion = suggest_name("buscar usuário", "gateway")
        assert re.match(r"^(find-one|find-many|create|update|delete)-", suggestion.primary)
        assert suggestion.primary.endswith("-usuario")

    def test_util_verbs(self, naming_suggester: NamingSuggester):
        candidates = naming_suggester.generate_candidates(["date"], LayerId.UTIL, NamingContext())
        for verb in ("format", "validate", "parse", "convert", "calculate"):
            assert f"{verb}-date" in candidates

    def test_repository_uses_bare_concept(self):
        assert suggest_name("repositório de usuários", "repository").primary in {
            "usuarios", "repositorio", "repositorio-usuarios",
        }

    def test_suffix_is_appended(self):
        suggestion = suggest_name("botão", "atom", NamingContext(suffix="-item"))
        assert suggestion.primary == "button-item"

    def test_pairs_are_generated(self, naming_suggester: NamingSuggester):
        candidates = naming_suggester.generate_candidates(
            ["button", "icon", "large"], LayerId.ATOM, NamingContext()
        )
        assert {"button-icon", "button-large", "icon-large"} <= set(candidates)
        assert "icon-button" not in candidates


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_reserved_word_falls_back(self):
        suggestion = suggest_name("type", "atom")
        assert suggestion.primary == "basic-atom"
        assert suggestion.confidence == pytest.approx(0.2)

    def test_existing_names_are_skipped(self):
        context = NamingContext(existing_names=["button-variantes"])
        suggestion = suggest_name("botão com variantes de cor", "atom", context)
        assert suggestion.primary == "variantes"
        assert "button-variantes" not in suggestion.alternatives

    @pytest.mark.parametrize("layer", list(LayerId))
    def test_empty_description_uses_fallback(self, layer: LayerId):
        assert suggest_name("", layer).primary == FALLBACK_NAMES[layer]

    @pytest.mark.parametrize("layer", list(LayerId))
    def test_fallback_names_satisfy_patterns(self, layer: LayerId):
        assert DEFAULT_TAXONOMY.profile(layer).matches_name(FALLBACK_NAMES[layer])

    @pytest.mark.parametrize("layer", list(LayerId))
    @pytest.mark.parametrize(
        "description",
        [
            "botão com variantes de cor",
            "tela de login com chamada de api",
            "header com navegação",
            "formatar data de nascimento",
            "!!!",
        ],
    )
    def test_every_suggestion_is_valid(self, layer: LayerId, description: str):
        profile = DEFAULT_TAXONOMY.profile(layer)
        suggestion = suggest_name(description, layer)
        for name in [suggestion.primary, *suggestion.alternatives]:
            assert profile.matches_name(name), name
            assert 2 <= len(name) <= 50

    def test_alternatives_capped(self):
        suggestion = suggest_name("botão ícone modal formulário lista card header", "atom")
        assert len(suggestion.alternatives) <= 4

    def test_too_long_names_rejected(self, naming_suggester: NamingSuggester):
        profile = DEFAULT_TAXONOMY.profile("atom")
        assert not naming_suggester.is_valid_name("a" * 51, profile)
        assert naming_suggester.is_valid_name("a" * 50, profile)


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


class TestRanking:
    def test_score_components(self, naming_suggester: NamingSuggester):
        profile = DEFAULT_TAXONOMY.profile("atom")
        # length 16 -> 19, 'variantes' found -> 15, pattern -> 10, one hyphen -> 8
        score = naming_suggester.score_name("button-variantes", "botão com variantes de cor", profile)
        assert score == 52

    def test_deterministic(self):
        first = suggest_name("header com navegação e busca", "organism")
        second = suggest_name("header com navegação e busca", "organism")
        assert first == second

    def test_confidence_bounds(self, naming_suggester: NamingSuggester):
        assert naming_suggester.naming_confidence("", "x") == 0.0
        assert naming_suggester.naming_confidence("card", "um card") == 1.0
        assert naming_suggester.naming_confidence("card-list", "um card") == pytest.approx(0.7)


# ---------------------------------------------------------------------------
# Provider concepts
# ---------------------------------------------------------------------------


class TestProviderConcepts:
    def test_provider_concepts_are_used(self, scripted_provider):
        provider = scripted_provider(concepts=["color", "variant"])
        suggester = NamingSuggester(provider=provider)
        suggestion = suggester.suggest_name("botão com variantes de cor", "atom")
        assert suggestion.primary == "color-variant"
        assert provider.calls == [("botão com variantes de cor", {"purpose": "naming"})]

    def test_empty_provider_concepts_use_dictionary(self, scripted_provider):
        suggester = NamingSuggester(provider=scripted_provider(concepts=[]))
        assert suggester.suggest_name("botão com variantes de cor", "atom").primary == "button-variantes"

    def test_provider_failure_falls_back(self, failing_provider: MagicMock, recording_console):
        suggester = NamingSuggester(provider=failing_provider)
        suggestion = suggester.suggest_name("botão com variantes de cor", "atom")
        assert suggestion.primary == "button-variantes"
        output = recording_console.export_text()
        assert "failing" in output
        assert "provider offline" in output

    def test_provider_wrong_return_type(self, recording_console):
        provider = MagicMock()
        provider.name = "broken"
        provider.analyze_description.return_value = {"concepts": ["x"]}
        suggestion = NamingSuggester(provider=provider).suggest_name("botão", "atom")
        assert suggestion.primary == "button"
        assert "expected PartialAnalysis" in recording_console.export_text()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_unknown_layer(self):
        with pytest.raises(InvalidLayerError):
            suggest_name("botão", "widget")
