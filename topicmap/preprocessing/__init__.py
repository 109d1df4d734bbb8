from .content_processor import (
    build_hierarchy_from_phrases,
    build_topic_hierarchy,
    extract_key_phrases,
    group_phrases,
)
from .spell_checker import (
    DictionarySpellChecker,
    SpellChecker,
    correct_spelling,
    load_remote_dictionary,
    open_spell_checker,
)
from .text_cleaner import normalize_text

__all__ = [
    "DictionarySpellChecker",
    "SpellChecker",
    "build_hierarchy_from_phrases",
    "build_topic_hierarchy",
    "correct_spelling",
    "extract_key_phrases",
    "group_phrases",
    "load_remote_dictionary",
    "normalize_text",
    "open_spell_checker",
]
