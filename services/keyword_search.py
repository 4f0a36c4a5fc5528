# DEPENDENCIES
import re
import sys
from typing import List
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from services.data_models import SearchHit
from utils.text_processor import TextProcessor


class KeywordSpotlightSearch:
    """
    Keyword scan over analyzed contract text, returning every occurrence with its surrounding context
    """
    CONTEXT_BEFORE      = 60
    CONTEXT_AFTER       = 120
    MIN_KEYWORD_LENGTH  = 4

    NO_INPUT_MESSAGE    = "Analyze a contract first."
    NO_MATCH_MESSAGE    = "No matching clause found."
    PLACEHOLDER_SNIPPET = "—"


    def search(self, normalized_text: Optional[str], query: str) -> List[SearchHit]:
        """
        Search `normalized_text` for the meaningful words of `query`

        Arguments:
        ----------
            normalized_text { str } : AnalysisResult.source_text; empty or None when nothing was analyzed

            query           { str } : Free-text question; words of 3 characters or less are ignored

        Returns:
        --------
            { list }                : Hits in keyword order then text order, or a single placeholder hit
        """
        if not normalized_text:
            return [self._placeholder(self.NO_INPUT_MESSAGE)]

        hits = list()

        for keyword in TextProcessor.extract_keywords(query, min_length = self.MIN_KEYWORD_LENGTH):
            hits.extend(self._scan(normalized_text, keyword))

        if not hits:
            return [self._placeholder(self.NO_MATCH_MESSAGE)]

        return hits


    def _scan(self, text: str, keyword: str) -> List[SearchHit]:
        # Keywords are literal text, never patterns
        pattern = re.compile(re.escape(keyword), re.IGNORECASE)
        hits    = list()

        for match in pattern.finditer(text):
            start = match.start()
            hits.append(SearchHit(context_snippet = text[start:match.end() + self.CONTEXT_AFTER],
                                  label           = f'Clause found: "{keyword}"',
                                  keyword         = keyword,
                                  leading_context = text[max(0, start - self.CONTEXT_BEFORE):start],
                                 ))

        return hits


    def _placeholder(self, message: str) -> SearchHit:
        return SearchHit(context_snippet = self.PLACEHOLDER_SNIPPET, label = message)
