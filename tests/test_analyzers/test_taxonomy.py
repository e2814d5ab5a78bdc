"""Tests for the layer taxonomy (khaos.analyzers.taxonomy)."""

from __future__ import annotations

import re

import pytest
from pydantic import ValidationError

from khaos.analyzers.models import InvalidLayerError, LayerId, Tier
from khaos.analyzers.taxonomy import (
    DEFAULT_TAXONOMY,
    ENTITY_PATTERN,
    LayerProfile,
    Taxonomy,
    get_profile,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Default taxonomy contents
# ---------------------------------------------------------------------------


class TestDefaultTaxonomy:
    def test_has_all_twelve_layers_in_canonical_order(self):
        assert DEFAULT_TAXONOMY.layers == list(LayerId)
        assert len(DEFAULT_TAXONOMY) == 12

    def test_weights(self):
        weights = {p.layer: p.weight for p in DEFAULT_TAXONOMY}
        assert weights[LayerId.ATOM] == 1.0
        assert weights[LayerId.FEATURE] == 2.0
        assert weights[LayerId.REPOSITORY] == 1.6
        assert weights[LayerId.ORGANISM] == 1.5

    @pytest.mark.parametrize(
        "layer, allowed",
        [
            (LayerId.ATOM, []),
            (LayerId.MOLECULE, [LayerId.ATOM]),
            (LayerId.ORGANISM, [LayerId.MOLECULE, LayerId.ATOM]),
            (LayerId.TEMPLATE, [LayerId.ORGANISM, LayerId.MOLECULE, LayerId.ATOM, LayerId.UTIL]),
            (LayerId.LAYOUT, [LayerId.FEATURE]),
            (LayerId.PARTICLE, [LayerId.UTIL]),
            (LayerId.MODEL, [LayerId.ENTITY]),
            (LayerId.ENTITY, []),
            (LayerId.UTIL, []),
            (LayerId.GATEWAY, [LayerId.ENTITY]),
            (LayerId.REPOSITORY, [LayerId.GATEWAY, LayerId.MODEL, LayerId.ENTITY]),
        ],
    )
    def test_allowed_dependencies(self, layer: LayerId, allowed: list[LayerId]):
        assert DEFAULT_TAXONOMY.allowed_dependencies(layer) == allowed

    def test_feature_may_use_everything_below_it(self):
        allowed = DEFAULT_TAXONOMY.allowed_dependencies(LayerId.FEATURE)
        assert LayerId.TEMPLATE in allowed
        assert LayerId.REPOSITORY in allowed
        assert LayerId.LAYOUT not in allowed
        assert LayerId.PARTICLE not in allowed

    def test_no_layer_depends_on_itself(self):
        for profile in DEFAULT_TAXONOMY:
            assert profile.layer not in profile.allowed_dependencies

    def test_default_graph_is_acyclic(self):
        assert DEFAULT_TAXONOMY.find_cycle() is None

    def test_every_profile_has_keywords(self):
        for profile in DEFAULT_TAXONOMY:
            assert profile.keywords, profile.layer

    def test_atom_tiers(self):
        atom = get_profile("atom")
        assert atom.complexity == Tier.LOW
        assert atom.reusability == Tier.HIGH
        assert atom.dependency_tier == "none"

    def test_entity_has_no_component_suffix(self):
        assert get_profile(LayerId.ENTITY).component_suffix == ""
        assert get_profile(LayerId.ENTITY).naming_pattern == ENTITY_PATTERN


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class TestTaxonomyLookups:
    def test_profile_accepts_string(self):
        assert DEFAULT_TAXONOMY.profile("Molecule").layer == LayerId.MOLECULE

    def test_unknown_layer_raises(self):
        with pytest.raises(InvalidLayerError, match="widget"):
            DEFAULT_TAXONOMY.profile("widget")

    def test_invalid_layer_error_is_value_error(self):
        with pytest.raises(ValueError):
            get_profile("service")

    def test_missing_profile_raises_key_error(self, tiny_taxonomy: Taxonomy):
        with pytest.raises(KeyError):
            tiny_taxonomy.profile(LayerId.FEATURE)

    def test_contains(self, tiny_taxonomy: Taxonomy):
        assert LayerId.ATOM in tiny_taxonomy
        assert LayerId.FEATURE not in tiny_taxonomy

    def test_by_directory(self):
        assert DEFAULT_TAXONOMY.by_directory("molecules") == LayerId.MOLECULE
        assert DEFAULT_TAXONOMY.by_directory("repositories") == LayerId.REPOSITORY
        assert DEFAULT_TAXONOMY.by_directory("components") is None


# ---------------------------------------------------------------------------
# Graph queries
# ---------------------------------------------------------------------------


class TestGraphQueries:
    def test_can_reach_direct_and_transitive(self):
        assert DEFAULT_TAXONOMY.can_reach(LayerId.MOLECULE, LayerId.ATOM)
        assert DEFAULT_TAXONOMY.can_reach(LayerId.LAYOUT, LayerId.ENTITY)

    def test_cannot_reach_upwards(self):
        assert not DEFAULT_TAXONOMY.can_reach(LayerId.ATOM, LayerId.MOLECULE)
        assert not DEFAULT_TAXONOMY.can_reach(LayerId.ENTITY, LayerId.GATEWAY)

    def test_find_cycle(self, cyclic_taxonomy: Taxonomy):
        cycle = cyclic_taxonomy.find_cycle()
        assert cycle is not None
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {LayerId.ATOM, LayerId.UTIL, LayerId.MOLECULE}


# ---------------------------------------------------------------------------
# Immutability & weights
# ---------------------------------------------------------------------------


class TestProfileModel:
    def test_profile_is_frozen(self):
        with pytest.raises(ValidationError):
            get_profile("atom").weight = 5.0

    def test_non_positive_weight_rejected(self):
        with pytest.raises(ValidationError):
            LayerProfile(layer=LayerId.ATOM, weight=0)

    def test_matches_name(self):
        assert get_profile("atom").matches_name("button-primary")
        assert not get_profile("atom").matches_name("ButtonPrimary")
        assert get_profile("feature").matches_name("wallet-deposit")
        assert not get_profile("feature").matches_name("deposit")
        assert get_profile("gateway").matches_name("find-one-user")
        assert not get_profile("gateway").matches_name("get-user")

    def test_entity_pattern(self):
        assert re.match(ENTITY_PATTERN, "TUserEntity")
        assert not re.match(ENTITY_PATTERN, "UserEntity")

    def test_with_weights_returns_new_taxonomy(self):
        heavier = DEFAULT_TAXONOMY.with_weights({LayerId.ATOM: 3.0})
        assert heavier.profile(LayerId.ATOM).weight == 3.0
        assert DEFAULT_TAXONOMY.profile(LayerId.ATOM).weight == 1.0
        assert heavier.profile(LayerId.MOLECULE).weight == 1.2

    def test_with_no_weights_is_identity(self):
        assert DEFAULT_TAXONOMY.with_weights({}) is DEFAULT_TAXONOMY
