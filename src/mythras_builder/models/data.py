"""Mythras reference data.

This module contains the built-in rules tables the builder ships with:
- standard skill base formulas and the professional skill list
- age brackets with bonus pools and per-skill caps
- cultures with combat styles, money rolls and social class tables
- careers
- the starting equipment price list (silver pieces)

``default_catalog()`` assembles them into a validated ``ReferenceCatalog``;
``load_catalog()`` reads a replacement catalog from JSON.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from mythras_builder.core.exceptions import CatalogError
from mythras_builder.core.logging import get_logger
from mythras_builder.models.catalog import ReferenceCatalog, SkillFormula
from mythras_builder.models.enums import Characteristic


logger = get_logger(__name__)

STR = Characteristic.STR
CON = Characteristic.CON
SIZ = Characteristic.SIZ
DEX = Characteristic.DEX
INT = Characteristic.INT
POW = Characteristic.POW
CHA = Characteristic.CHA

# =============================================================================
# Skills
# =============================================================================

STANDARD_SKILL_FORMULAS: dict[str, SkillFormula] = {
    "Athletics": SkillFormula.sum_of(STR, DEX),
    "Boating": SkillFormula.sum_of(STR, CON),
    "Brawn": SkillFormula.sum_of(STR, SIZ),
    "Conceal": SkillFormula.sum_of(DEX, POW),
    "Customs": SkillFormula.double(INT, 40),
    "Dance": SkillFormula.sum_of(DEX, CHA),
    "Deceit": SkillFormula.sum_of(INT, CHA),
    "Drive": SkillFormula.sum_of(DEX, POW),
    "Endurance": SkillFormula.double(CON),
    "Evade": SkillFormula.double(DEX),
    "First Aid": SkillFormula.sum_of(INT, DEX),
    "Influence": SkillFormula.double(CHA),
    "Insight": SkillFormula.sum_of(INT, POW),
    "Locale": SkillFormula.double(INT),
    "Native Tongue": SkillFormula.sum_of(INT, CHA, 40),
    "Perception": SkillFormula.sum_of(INT, POW),
    "Ride": SkillFormula.sum_of(DEX, POW),
    "Sing": SkillFormula.sum_of(CHA, POW),
    "Stealth": SkillFormula.sum_of(DEX, INT),
    "Swim": SkillFormula.sum_of(STR, CON),
    "Unarmed": SkillFormula.sum_of(STR, DEX),
    "Willpower": SkillFormula.double(POW),
    "Combat Style": SkillFormula.sum_of(STR, DEX),
}
"""Base formula for every standard skill. The keys are the standard skill list."""

PROFESSIONAL_SKILLS: tuple[str, ...] = (
    "Art",
    "Commerce",
    "Craft",
    "Courtesy",
    "Language",
    "Lore",
    "Musicianship",
    "Streetwise",
    "Culture",
    "Disguise",
    "Sleight",
    "Survival",
    "Track",
    "Healing",
    "Teach",
    "Bureaucracy",
    "Linguistics",
    "Gambling",
    "Seduction",
    "Engineering",
    "Mechanisms",
    "Research",
    "Acrobatics",
    "Acting",
    "Oratory",
    "Navigation",
    "Seamanship",
    "Electronics",
    "Magic",
    "Literacy",
    "Pilot",
    "Sensors",
    "Politics",
    "Customs",
    "Animal Husbandry",
)
"""Every professional skill. These start at 0 unless they also have a formula."""

# =============================================================================
# Age Brackets
# =============================================================================

AGE_BRACKETS: list[dict[str, Any]] = [
    {"key": "Young", "bonus": 100, "max_increase": 10, "age_expression": "10+1d6"},
    {"key": "Adult", "bonus": 150, "max_increase": 15, "age_expression": "15+2d6"},
    {"key": "Middle", "bonus": 200, "max_increase": 20, "age_expression": "25+3d6"},
    {"key": "Senior", "bonus": 250, "max_increase": 25, "age_expression": "40+4d6"},
    {"key": "Old", "bonus": 300, "max_increase": 30, "age_expression": "60+5d6"},
]

# =============================================================================
# Cultures
# =============================================================================

CULTURES: list[dict[str, Any]] = [
    {
        "key": "Barbarian",
        "standard": (
            "Athletics", "Brawn", "Endurance", "First Aid", "Locale",
            "Perception", "Boating", "Ride", "Combat Style",
        ),
        "professional": (
            "Craft", "Healing", "Lore", "Musicianship", "Navigation",
            "Seamanship", "Survival", "Track",
        ),
        "combat_styles": (
            "Great Axe", "Sword & Shield", "Spear & Shield", "Two-Handed Weapon", "Unarmed",
        ),
        "money": {"dice": 2, "sides": 6},
        "social_classes": (
            {"name": "Slave", "low": 1, "high": 10, "multiplier": 0.5},
            {"name": "Freeman", "low": 11, "high": 70, "multiplier": 1},
            {"name": "Warrior", "low": 71, "high": 95, "multiplier": 1.5},
            {"name": "Noble", "low": 96, "high": 100, "multiplier": 2},
        ),
    },
    {
        "key": "Civilized",
        "standard": (
            "Conceal", "Deceit", "Drive", "Influence", "Insight", "Locale",
            "Willpower", "Combat Style",
        ),
        "professional": (
            "Art", "Commerce", "Craft", "Courtesy", "Language", "Lore",
            "Musicianship", "Streetwise",
        ),
        "combat_styles": (
            "Sword & Shield", "Crossbow & Dagger", "Dual Wield", "Mounted Combat", "Unarmed",
        ),
        "money": {"dice": 3, "sides": 6},
        "social_classes": (
            {"name": "Slave", "low": 1, "high": 5, "multiplier": 0.5},
            {"name": "Peasant", "low": 6, "high": 50, "multiplier": 1},
            {"name": "Townsman", "low": 51, "high": 80, "multiplier": 1.5},
            {"name": "Merchant", "low": 81, "high": 95, "multiplier": 2},
            {"name": "Noble", "low": 96, "high": 100, "multiplier": 3},
        ),
    },
    {
        "key": "Nomadic",
        "standard": (
            "Endurance", "First Aid", "Locale", "Perception", "Stealth",
            "Athletics", "Boating", "Swim", "Drive", "Ride", "Combat Style",
        ),
        "professional": (
            "Craft", "Culture", "Language", "Lore", "Musicianship",
            "Navigation", "Survival", "Track",
        ),
        "combat_styles": ("Mounted Combat", "Bow & Spear", "Spear & Shield", "Unarmed"),
        "money": {"dice": 1, "sides": 6},
        "social_classes": (
            {"name": "Slave", "low": 1, "high": 10, "multiplier": 0.5},
            {"name": "Herdsman", "low": 11, "high": 60, "multiplier": 1},
            {"name": "Horseman", "low": 61, "high": 90, "multiplier": 1.5},
            {"name": "Chieftain", "low": 91, "high": 100, "multiplier": 2},
        ),
    },
    {
        "key": "Primitive",
        "standard": (
            "Brawn", "Endurance", "Evade", "Locale", "Perception", "Stealth",
            "Athletics", "Boating", "Swim", "Combat Style",
        ),
        "professional": (
            "Craft", "Healing", "Lore", "Musicianship", "Navigation", "Survival", "Track",
        ),
        "combat_styles": ("Bow & Spear", "Staff & Sling", "Spear & Shield", "Unarmed"),
        "money": {"dice": 1, "sides": 4},
        "social_classes": (
            {"name": "Outcast", "low": 1, "high": 10, "multiplier": 0.5},
            {"name": "Hunter", "low": 11, "high": 70, "multiplier": 1},
            {"name": "Shaman", "low": 71, "high": 90, "multiplier": 1.5},
            {"name": "Chief", "low": 91, "high": 100, "multiplier": 2},
        ),
    },
]

# =============================================================================
# Careers
# =============================================================================


def _career(key: str, standard: str, professional: str) -> dict[str, Any]:
    return {
        "key": key,
        "standard": tuple(s.strip() for s in standard.split(",")),
        "professional": tuple(s.strip() for s in professional.split(",")),
    }


CAREERS: list[dict[str, Any]] = [
    _career(
        "Agent",
        "Conceal, Deceit, Evade, Insight, Perception, Stealth, Combat Style",
        "Culture, Disguise, Language, Sleight, Streetwise, Survival, Track",
    ),
    _career(
        "Beast Handler",
        "Drive, Endurance, First Aid, Influence, Locale, Ride, Willpower",
        "Craft, Commerce, Healing, Lore, Survival, Teach, Track",
    ),
    _career(
        "Bounty Hunter",
        "Athletics, Endurance, Evade, Insight, Perception, Stealth, Combat Style",
        "Bureaucracy, Commerce, Culture, Linguistics, Streetwise, Survival, Track",
    ),
    _career(
        "Courtesan",
        "Customs, Dance, Deceit, Influence, Insight, Perception, Sing",
        "Art, Courtesy, Culture, Gambling, Language, Musicianship, Seduction",
    ),
    _career(
        "Crafter",
        "Brawn, Drive, Influence, Insight, Locale, Perception, Willpower",
        "Art, Commerce, Craft, Engineering, Mechanisms, Streetwise",
    ),
    _career(
        "Detective",
        "Customs, Evade, Influence, Insight, Perception, Stealth, Combat Style",
        "Bureaucracy, Culture, Disguise, Linguistics, Lore, Research, Sleight, Streetwise",
    ),
    _career(
        "Entertainer",
        "Athletics, Brawn, Dance, Deceit, Influence, Insight, Sing",
        "Acrobatics, Acting, Oratory, Musicianship, Seduction, Sleight, Streetwise",
    ),
    _career(
        "Farmer",
        "Athletics, Brawn, Drive, Endurance, Locale, Perception, Ride",
        "Commerce, Craft, Lore, Navigation, Survival, Track",
    ),
    _career(
        "Fisher",
        "Athletics, Boating, Endurance, Locale, Perception, Stealth, Swim",
        "Commerce, Craft, Lore, Navigation, Seamanship, Survival",
    ),
    _career(
        "Gambler",
        "Athletics, Brawn, Endurance, Locale, Perception, Willpower, Drive, Ride",
        "Acting, Bureaucracy, Commerce, Courtesy, Gambling, Research, Sleight, Streetwise",
    ),
    _career(
        "Herder",
        "Endurance, First Aid, Insight, Locale, Perception, Ride, Combat Style",
        "Commerce, Craft, Healing, Navigation, Musicianship, Survival, Track",
    ),
    _career(
        "Hunter",
        "Athletics, Endurance, Locale, Perception, Ride, Stealth, Combat Style",
        "Commerce, Craft, Lore, Mechanisms, Navigation, Survival, Track",
    ),
    _career(
        "Journalist",
        "Customs, Deceit, Influence, Insight, Locale, Native Tongue, Perception",
        "Bureaucracy, Culture, Language, Lore, Oratory, Politics, Streetwise",
    ),
    _career(
        "Magician",
        "Customs, Deceit, Influence, Insight, Locale, Perception, Willpower",
        "Culture, Magic, Literacy, Lore, Oratory, Sleight",
    ),
    _career(
        "Mechanic",
        "Brawn, Culture, Drive, Endurance, Influence, Locale, Willpower",
        "Commerce, Craft, Electronics, Gambling, Mechanisms, Streetwise",
    ),
    _career(
        "Merchant",
        "Boating, Drive, Deceit, Insight, Influence, Locale, Ride",
        "Commerce, Courtesy, Culture, Language, Navigation, Seamanship, Streetwise",
    ),
    _career(
        "Miner",
        "Athletics, Brawn, Endurance, Locale, Perception, Sing, Willpower",
        "Commerce, Craft, Engineering, Lore, Mechanisms, Navigation, Survival",
    ),
    _career(
        "Official",
        "Customs, Deceit, Influence, Insight, Locale, Perception, Willpower",
        "Bureaucracy, Commerce, Courtesy, Language, Literacy, Lore, Oratory",
    ),
    _career(
        "Physician",
        "Dance, First Aid, Influence, Insight, Locale, Sing, Willpower",
        "Commerce, Craft, Healing, Language, Literacy, Lore, Streetwise",
    ),
    _career(
        "Pilot",
        "Brawn, Drive, Endurance, Evade, Locale, Perception, Willpower",
        "Customs, Electronics, Mechanisms, Navigation, Pilot, Sensors, Streetwise",
    ),
    _career(
        "Politician",
        "Customs, Deceit, Influence, Insight, Locale, Native Tongue, Perception",
        "Bureaucracy, Courtesy, Culture, Language, Lore, Oratory, Politics",
    ),
    _career(
        "Priest",
        "Customs, Dance, Deceit, Influence, Insight, Locale, Willpower",
        "Bureaucracy, Courtesy, Customs, Literacy, Lore, Oratory, Politics",
    ),
]

# =============================================================================
# Equipment (silver pieces)
# =============================================================================

EQUIPMENT: dict[str, dict[str, int]] = {
    "weapons": {
        "Dagger": 20,
        "Short Sword": 50,
        "Long Sword": 60,
        "Axe": 40,
        "Spear": 30,
        "Bow and 20 Arrows": 80,
        "Crossbow and 20 Bolts": 100,
    },
    "armour": {
        "Leather Armour": 100,
        "Studded Leather": 150,
        "Chain Shirt": 300,
        "Chain Mail": 500,
        "Shield": 40,
    },
    "tools": {
        "Backpack": 10,
        "Bedroll": 5,
        "Lantern": 15,
        "Rope (50 ft)": 10,
        "Waterskin": 5,
    },
    "provisions": {
        "Rations (1 week)": 10,
        "Wine (jug)": 8,
        "Ale (jug)": 6,
        "Spices": 4,
    },
    "misc": {
        "Flint & Steel": 2,
        "Blank Parchment (10 sheets)": 3,
        "Ink & Quill": 5,
        "Small Mirror": 12,
        "Holy Symbol": 15,
    },
}


# =============================================================================
# Catalog Assembly
# =============================================================================


@lru_cache(maxsize=1)
def default_catalog() -> ReferenceCatalog:
    """Build the built-in Mythras reference catalog.

    The catalog is immutable, so one shared instance is returned.

    Returns:
        The validated default catalog.
    """
    return ReferenceCatalog(
        skill_formulas=STANDARD_SKILL_FORMULAS,
        professional_skills=PROFESSIONAL_SKILLS,
        ages=AGE_BRACKETS,
        cultures=CULTURES,
        careers=CAREERS,
        equipment=[
            {"name": name, "cost": cost, "category": category}
            for category, items in EQUIPMENT.items()
            for name, cost in items.items()
        ],
    )


def load_catalog(path: str | Path) -> ReferenceCatalog:
    """Load a reference catalog from a JSON file.

    Args:
        path: Path to a JSON document in the ``ReferenceCatalog`` schema
            (as produced by ``catalog.model_dump_json()``).

    Returns:
        The validated catalog.

    Raises:
        CatalogError: If the file cannot be read or fails validation.
    """
    catalog_path = Path(path)
    try:
        raw = catalog_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(
            f"Cannot read catalog file: {exc}",
            source_file=str(catalog_path),
        ) from exc

    try:
        catalog = ReferenceCatalog.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise CatalogError(
            f"Invalid catalog: {exc.error_count()} validation error(s)",
            source_file=str(catalog_path),
            details={"errors": [err["msg"] for err in exc.errors()]},
        ) from exc

    logger.info(
        "Catalog loaded",
        source_file=str(catalog_path),
        cultures=len(catalog.cultures),
        careers=len(catalog.careers),
    )
    return catalog


def resolve_catalog(catalog_path: str | Path | None = None) -> ReferenceCatalog:
    """Return the catalog at ``catalog_path``, or the built-in one."""
    if catalog_path is None:
        return default_catalog()
    return load_catalog(catalog_path)


__all__ = [
    "STANDARD_SKILL_FORMULAS",
    "PROFESSIONAL_SKILLS",
    "AGE_BRACKETS",
    "CULTURES",
    "CAREERS",
    "EQUIPMENT",
    "default_catalog",
    "load_catalog",
    "resolve_catalog",
]
