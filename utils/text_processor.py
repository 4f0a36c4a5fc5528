# DEPENDENCIES
import re
from typing import List


class TextProcessor:
    """
    Text processing and normalization utilities shared by the analyzer, the diff engine and the search
    """
    WHITESPACE_RUN = re.compile(r'\s+')


    @staticmethod
    def normalize_text(text: str) -> str:
        """
        Collapse every whitespace run (newlines included) to a single space and trim

        Arguments:
        ----------
            text { str } : Input text

        Returns:
        --------
                 { str } : Normalized text
        """
        if not text:
            return ""

        return TextProcessor.WHITESPACE_RUN.sub(' ', text).strip()


    @staticmethod
    def tokenize_words(text: str) -> List[str]:
        """
        Whitespace-delimited tokens; empty tokens never appear
        """
        if not text:
            return []

        return text.split()


    @staticmethod
    def extract_keywords(query: str, min_length: int = 4) -> List[str]:
        """
        Lower-cased query words of at least `min_length` characters, in query order

        Arguments:
        ----------
            query      { str } : Free-text question or keyword list

            min_length { int } : Shortest word kept; shorter words are treated as noise

        Returns:
        --------
                { list }       : Keywords (duplicates kept)
        """
        if not query:
            return []

        return [word for word in query.lower().split() if len(word) >= min_length]
