"""Static synonym classes used by the exact matching tier."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SynonymClass:
    """Canonical concept and the phrases that trigger it."""

    name: str
    triggers: frozenset[str]

    def triggered_by(self, text: str) -> bool:
        """Return whether any trigger occurs in the lower-cased text."""
        lowered = text.lower()
        return any(trigger in lowered for trigger in self.triggers)


def _synonym_class(name: str, *triggers: str) -> SynonymClass:
    return SynonymClass(name=name, triggers=frozenset(triggers))


# Triggers are substring-matched: short ones such as "m", "us" or "in" hit many labels.
SYNONYM_CLASSES: tuple[SynonymClass, ...] = (
    _synonym_class(
        "yes",
        "yes",
        "true",
        "correct",
        "agree",
        "accept",
        "affirmative",
        "definitely",
        "absolutely",
        "sure",
    ),
    _synonym_class(
        "no",
        "no",
        "false",
        "incorrect",
        "disagree",
        "decline",
        "negative",
        "never",
        "not really",
    ),
    _synonym_class("male", "male", "man", "m", "gentleman", "guy"),
    _synonym_class("female", "female", "woman", "f", "lady", "girl"),
    _synonym_class("bachelor", "bachelor", "bs", "ba", "undergraduate", "bachelors", "college degree"),
    _synonym_class("master", "master", "ms", "ma", "graduate", "masters", "masters degree"),
    _synonym_class("phd", "phd", "doctorate", "doctoral", "doctor", "ph.d"),
    _synonym_class("experience", "experienced", "yes", "have experience", "work experience", "professional"),
    _synonym_class(
        "no experience",
        "no experience",
        "entry level",
        "fresher",
        "beginner",
        "new graduate",
        "recent graduate",
    ),
    _synonym_class("full time", "full time", "fulltime", "full-time", "permanent", "regular"),
    _synonym_class("part time", "part time", "parttime", "part-time", "temporary", "contract"),
    _synonym_class("united states", "usa", "us", "america", "united states", "u.s.", "u.s.a"),
    _synonym_class("canada", "canada", "ca", "canadian"),
    _synonym_class("india", "india", "indian", "in"),
    _synonym_class("authorized", "authorized", "eligible", "permitted", "allowed", "legal"),
)


def is_semantic_match(
    answer: str,
    option_text: str,
    *,
    classes: tuple[SynonymClass, ...] = SYNONYM_CLASSES,
) -> bool:
    """Return whether answer and option share a synonym class.

    Args:
        answer (str): Answer text.
        option_text (str): Candidate option label.
        classes (tuple[SynonymClass, ...]): Synonym table to consult.

    Returns:
        bool: True when one class is triggered by both texts.
    """
    return any(item.triggered_by(answer) and item.triggered_by(option_text) for item in classes)


def matching_classes(text: str, *, classes: tuple[SynonymClass, ...] = SYNONYM_CLASSES) -> list[str]:
    """Return the names of the classes a text triggers, in table order."""
    return [item.name for item in classes if item.triggered_by(text)]
