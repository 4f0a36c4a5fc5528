# DEPENDENCIES
import sys
import html
from typing import Dict
from pathlib import Path
from typing import Sequence
from dataclasses import dataclass

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from services.data_models import DiffToken
from services.data_models import DiffStatus


THEME_CLASSES = {"dark"  : {DiffStatus.DELETED  : "bg-red-500/20 text-red-200 px-1 rounded",
                            DiffStatus.INSERTED : "bg-emerald-500/20 text-emerald-200 px-1 rounded",
                           },
                 "light" : {DiffStatus.DELETED  : "bg-red-50 text-red-700 line-through px-1 rounded",
                            DiffStatus.INSERTED : "bg-emerald-50 text-emerald-700 px-1 rounded",
                           },
                }


@dataclass(frozen = True)
class RenderOptions:
    """
    Presentation settings handed to the renderer by its caller
    """
    theme     : str = "dark"
    separator : str = " "

    @property
    def classes(self) -> Dict[DiffStatus, str]:
        return THEME_CLASSES.get(self.theme, THEME_CLASSES["dark"])


def render_html(tokens: Sequence[DiffToken], options: RenderOptions = RenderOptions()) -> str:
    """
    Deletions as <del>, insertions as <ins>, unchanged words as <span>; every value is HTML-escaped
    """
    classes = options.classes
    parts   = list()

    for token in tokens:
        value = html.escape(token.value, quote = True)

        if (token.status is DiffStatus.DELETED):
            parts.append(f'<del class="{classes[DiffStatus.DELETED]}">{value}</del>')

        elif (token.status is DiffStatus.INSERTED):
            parts.append(f'<ins class="{classes[DiffStatus.INSERTED]}">{value}</ins>')

        else:
            parts.append(f"<span>{value}</span>")

    return options.separator.join(parts)


def render_text(tokens: Sequence[DiffToken], separator: str = " ") -> str:
    """
    Plain-text markup: [-deleted-] {+inserted+} unchanged
    """
    markers = {DiffStatus.DELETED  : "[-{}-]",
               DiffStatus.INSERTED : "{{+{}+}}",
               DiffStatus.EQUAL    : "{}",
              }

    return separator.join(markers[token.status].format(token.value) for token in tokens)
