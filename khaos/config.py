"""Khaos analyzer configuration.

Centralised, typed configuration for the analyzers. All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.

The defaults reproduce the scoring constants the layer ranking was tuned
with; changing them changes which layer wins for a given description.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from khaos.analyzers.models import LayerId
from khaos.analyzers.taxonomy import DEFAULT_TAXONOMY, Taxonomy


class ScoringConfig(BaseModel):
    """Points awarded by the layer classifier per match type."""

    exact_match: float = Field(default=10, ge=0, description="Keyword found in the description")
    partial_match: float = Field(default=5, ge=0, description="Per token overlapping a keyword")
    synonym_match: float = Field(default=3, ge=0, description="Keyword linked by the synonym table")
    feature_match: float = Field(default=8, ge=0, description="Per keyword contained in a feature")
    complexity_match: float = Field(default=5, ge=0, description="Per complexity indicator word")
    dependency_match: float = Field(default=3, ge=0, description="Per dependency-tier word")
    min_confidence: float = Field(
        default=0.1, ge=0, le=1, description="Confidence floor when both top scores are non-zero"
    )
    max_alternatives: int = Field(default=3, ge=1, description="Alternatives kept after the primary")


class NamingConfig(BaseModel):
    """Tuning knobs for the naming suggester."""

    ideal_length: int = Field(default=15, ge=1, description="Length that earns full length points")
    min_length: int = Field(default=2, ge=1)
    max_length: int = Field(default=50, ge=2)
    max_alternatives: int = Field(default=4, ge=0)
    module_prefix: str = Field(
        default="module", description="Feature prefix used when the caller gives none"
    )


class Config(BaseModel):
    """Global Khaos analyzer configuration.

    Instances are typically created once, by :class:`AnalyzerSuite` or by the
    consuming CLI, and then passed through to every analyzer.
    """

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
    layer_weights: dict[LayerId, float] = Field(
        default_factory=dict, description="Per-layer weight overrides"
    )
    config_file: str = Field(default=".khaos.json")

    def taxonomy(self, base: Taxonomy = DEFAULT_TAXONOMY) -> Taxonomy:
        """Return *base* with :attr:`layer_weights` applied."""
        for layer, weight in self.layer_weights.items():
            if weight <= 0:
                raise ValueError(f"Weight for layer '{layer.value}' must be positive, got {weight}")
        return base.with_weights(self.layer_weights)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to :attr:`config_file` in the
                current directory.

        Returns:
            The path where the file was written.
        """
        target = Path(path or self.config_file)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            KHAOS_MODULE_PREFIX, KHAOS_IDEAL_NAME_LENGTH, KHAOS_MAX_ALTERNATIVES,
            KHAOS_CONFIG_FILE, and KHAOS_WEIGHT_<LAYER> (e.g. KHAOS_WEIGHT_FEATURE).
        """
        naming_kwargs: dict[str, Any] = {}
        if os.environ.get("KHAOS_MODULE_PREFIX"):
            naming_kwargs["module_prefix"] = os.environ["KHAOS_MODULE_PREFIX"]
        if os.environ.get("KHAOS_IDEAL_NAME_LENGTH"):
            naming_kwargs["ideal_length"] = int(os.environ["KHAOS_IDEAL_NAME_LENGTH"])

        scoring_kwargs: dict[str, Any] = {}
        if os.environ.get("KHAOS_MAX_ALTERNATIVES"):
            scoring_kwargs["max_alternatives"] = int(os.environ["KHAOS_MAX_ALTERNATIVES"])

        weights: dict[LayerId, float] = {}
        for layer in LayerId:
            raw = os.environ.get(f"KHAOS_WEIGHT_{layer.value.upper()}")
            if raw:
                weights[layer] = float(raw)

        return cls(
            scoring=ScoringConfig(**scoring_kwargs),
            naming=NamingConfig(**naming_kwargs),
            layer_weights=weights,
            config_file=os.environ.get("KHAOS_CONFIG_FILE", ".khaos.json"),
        )
