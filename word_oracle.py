"""
Word Validity Oracle
====================

English word list loaded once per process. Answers a single question:
is this a real word?

By default the list is the wordfreq English vocabulary (top
ANCHOR_WORDFREQ_SIZE entries). ANCHOR_WORDLIST_PATH points at a text
file (one word per line) to use instead.
"""

import os
import re

from wordfreq import top_n_list

import config

WORD_RE = re.compile(r'^[a-z]+$')


def _clean(words):
    out = set()
    for w in words:
        w = w.strip().lower()
        # keep only simple alphabetic words
        if WORD_RE.match(w):
            out.add(w)
    return out


class WordList:
    def __init__(self, words):
        self.words = frozenset(words)

    @classmethod
    def load_from_txt(cls, path):
        if not os.path.exists(path):
            raise FileNotFoundError(f"Word list file not found: {path}")

        with open(path, 'r', encoding='utf-8', errors='ignore') as f:
            words = _clean(f)

        print(f"[Oracle] Loaded {len(words)} words from {path}")
        return cls(words)

    @classmethod
    def load_from_wordfreq(cls, n, lang='en'):
        words = _clean(top_n_list(lang, n))
        print(f"[Oracle] Loaded {len(words)} words from wordfreq ({lang}, top {n})")
        return cls(words)

    def is_word(self, w):
        """True if the lowercased word is in the list."""
        if not w:
            return False
        return w.lower() in self.words

    def __len__(self):
        return len(self.words)


_oracle = None


def get_oracle():
    """Process-lifetime word list, loaded on first use."""
    global _oracle
    if _oracle is None:
        if config.WORDLIST_PATH:
            _oracle = WordList.load_from_txt(config.WORDLIST_PATH)
        else:
            _oracle = WordList.load_from_wordfreq(config.WORDFREQ_SIZE)
    return _oracle
