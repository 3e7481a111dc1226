"""
Given-name nickname table.

The table is data, not logic: NICKNAME_GROUPS lists formal names and their
common short forms, and build_nickname_table turns that into a lookup that
works in both directions ("mike" → "michael" as well as "michael" → "mike").
A deployment can swap the table for a YAML file with the same shape.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

import yaml

NicknameTable = Mapping[str, frozenset[str]]

NICKNAME_GROUPS: Mapping[str, tuple[str, ...]] = {
    "alexander": ("alex",),
    "andrew": ("andy", "drew"),
    "anthony": ("tony",),
    "benjamin": ("ben",),
    "catherine": ("cathy", "cat", "kate"),
    "charles": ("charlie", "chuck"),
    "christopher": ("chris",),
    "daniel": ("dan", "danny"),
    "david": ("dave", "davy"),
    "edward": ("ed", "eddie", "ted"),
    "elizabeth": ("liz", "beth", "betty"),
    "gregory": ("greg",),
    "james": ("jim", "jimmy"),
    "jennifer": ("jen", "jenny"),
    "jessica": ("jess", "jessie"),
    "john": ("johnny", "jack"),
    "jonathan": ("jon",),
    "joseph": ("joe", "joey"),
    "katherine": ("kathy", "kate", "katie"),
    "kenneth": ("ken",),
    "margaret": ("maggie", "meg", "peg"),
    "matthew": ("matt",),
    "michael": ("mike", "mick"),
    "nicholas": ("nick",),
    "patricia": ("pat", "patty", "tricia"),
    "peter": ("pete",),
    "rebecca": ("becky",),
    "richard": ("rick", "dick", "rich"),
    "robert": ("rob", "bob", "bobby"),
    "samuel": ("sam",),
    "stephen": ("steve",),
    "steven": ("steve",),
    "susan": ("sue", "susie"),
    "thomas": ("tom", "tommy"),
    "timothy": ("tim",),
    "william": ("bill", "will", "billy"),
}


def build_nickname_table(groups: Mapping[str, Iterable[str]]) -> NicknameTable:
    """
    Build a bidirectional nickname lookup from formal → nicknames groups.

    Examples:
        table = build_nickname_table({"michael": ["mike", "mick"]})
        table["michael"] → frozenset({"mike", "mick"})
        table["mike"] → frozenset({"michael"})

    Nicknames of the same formal name are not linked to each other, so
    "mike" and "mick" stay distinct.
    """
    variants: dict[str, set[str]] = defaultdict(set)
    for formal, nicknames in groups.items():
        formal_key = formal.strip().lower()
        if not formal_key:
            continue
        for nickname in nicknames:
            nickname_key = str(nickname).strip().lower()
            if not nickname_key or nickname_key == formal_key:
                continue
            variants[formal_key].add(nickname_key)
            variants[nickname_key].add(formal_key)
    return MappingProxyType({name: frozenset(found) for name, found in variants.items()})


def load_nickname_table(path: Path) -> NicknameTable:
    """Load a formal → [nicknames] mapping from a YAML file."""
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Nickname file {path} must contain a mapping of name -> [nicknames]")
    groups: dict[str, list[str]] = {}
    for formal, nicknames in raw.items():
        if isinstance(nicknames, str):
            nicknames = [nicknames]
        groups[str(formal)] = [str(n) for n in nicknames or []]
    return build_nickname_table(groups)


def nickname_variants(name: str, table: NicknameTable) -> frozenset[str]:
    return table.get(name, frozenset())


def are_nicknames(first: str, second: str, table: NicknameTable) -> bool:
    return second in table.get(first, ()) or first in table.get(second, ())


DEFAULT_NICKNAMES: NicknameTable = build_nickname_table(NICKNAME_GROUPS)
