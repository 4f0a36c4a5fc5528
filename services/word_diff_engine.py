# DEPENDENCIES
import sys
import numpy as np
from typing import Dict
from typing import List
from pathlib import Path
from typing import Sequence

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from services.data_models import DiffToken
from services.data_models import DiffStatus
from services.data_models import DiffSummary
from utils.logger import ContraScopeLogger
from utils.text_processor import TextProcessor


class WordDiffEngine:
    """
    Word-level diff of two contract versions, built on the longest common subsequence of their tokens

    When both choices are equally good by the LCS table, deletion wins over insertion; the output
    of every tie case depends on that rule, so it must stay `>=`
    """
    @ContraScopeLogger.log_execution_time("word_diff")
    def diff(self, text_a: str, text_b: str) -> List[DiffToken]:
        """
        Ordered edit script turning version A into version B

        Arguments:
        ----------
            text_a { str } : Original version

            text_b { str } : Modified version

        Returns:
        --------
            { list }       : DiffTokens in document order
        """
        tokens_a = TextProcessor.tokenize_words(text_a)
        tokens_b = TextProcessor.tokenize_words(text_b)

        return self.diff_tokens(tokens_a, tokens_b)


    def diff_tokens(self, tokens_a: Sequence[str], tokens_b: Sequence[str]) -> List[DiffToken]:
        table  = self.build_lcs_table(tokens_a, tokens_b)

        # Collected back to front, reversed once at the end
        script = list()
        i, j   = len(tokens_a), len(tokens_b)

        while (i > 0) and (j > 0):
            if (tokens_a[i - 1] == tokens_b[j - 1]):
                script.append(DiffToken(tokens_a[i - 1], DiffStatus.EQUAL))
                i -= 1
                j -= 1

            elif (table[i - 1, j] >= table[i, j - 1]):
                script.append(DiffToken(tokens_a[i - 1], DiffStatus.DELETED))
                i -= 1

            else:
                script.append(DiffToken(tokens_b[j - 1], DiffStatus.INSERTED))
                j -= 1

        while (i > 0):
            script.append(DiffToken(tokens_a[i - 1], DiffStatus.DELETED))
            i -= 1

        while (j > 0):
            script.append(DiffToken(tokens_b[j - 1], DiffStatus.INSERTED))
            j -= 1

        script.reverse()

        return script


    @staticmethod
    def build_lcs_table(tokens_a: Sequence[str], tokens_b: Sequence[str]) -> np.ndarray:
        """
        (m+1) x (n+1) table where cell [i, j] is the LCS length of tokens_a[:i] and tokens_b[:j]
        """
        m, n       = len(tokens_a), len(tokens_b)
        table      = np.zeros((m + 1, n + 1), dtype = np.int32)

        if (m == 0) or (n == 0):
            return table

        # Integer ids make the inner comparison a plain int test
        vocabulary : Dict[str, int] = dict()
        ids_a      = [vocabulary.setdefault(token, len(vocabulary)) for token in tokens_a]
        ids_b      = [vocabulary.setdefault(token, len(vocabulary)) for token in tokens_b]

        previous   = [0] * (n + 1)

        for i in range(1, m + 1):
            current = [0] * (n + 1)
            token   = ids_a[i - 1]

            for j in range(1, n + 1):
                if (token == ids_b[j - 1]):
                    current[j] = previous[j - 1] + 1

                else:
                    current[j] = previous[j] if previous[j] >= current[j - 1] else current[j - 1]

            table[i, :] = current
            previous    = current

        return table


    @staticmethod
    def summarize(tokens: Sequence[DiffToken]) -> DiffSummary:
        """
        Counts per status, and similarity = 2 * equal / (len(A) + len(B))
        """
        equal    = sum(1 for token in tokens if token.status is DiffStatus.EQUAL)
        deleted  = sum(1 for token in tokens if token.status is DiffStatus.DELETED)
        inserted = sum(1 for token in tokens if token.status is DiffStatus.INSERTED)

        total    = (equal + deleted) + (equal + inserted)

        return DiffSummary(equal      = equal,
                           deleted    = deleted,
                           inserted   = inserted,
                           similarity = (2 * equal / total) if total else 1.0,
                          )


    @staticmethod
    def reconstruct(tokens: Sequence[DiffToken], side: str = "a") -> List[str]:
        """
        Token sequence of one version read back from a diff: "a" keeps equal + deleted, "b" keeps equal + inserted
        """
        dropped = DiffStatus.INSERTED if (side == "a") else DiffStatus.DELETED

        return [token.value for token in tokens if token.status is not dropped]
