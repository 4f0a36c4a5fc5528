# DEPENDENCIES
import sys
import json
from typing import Any
from typing import Dict
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from services.data_models import AnalysisResult


def export_analysis(result: AnalysisResult) -> Dict[str, Any]:
    """
    Export document of an analysis; key names are consumed by existing downloads and must not change

    Arguments:
    ----------
        result { AnalysisResult } : Analysis with provenance attached

    Returns:
    --------
        { dict }                  : fileName, fileSize (when known), analyzedAt, globalScore, riskLevel,
                                    summary, clauseIssues, negotiationPoints
    """
    document = {"fileName"          : result.source_identifier,
                "analyzedAt"        : result.analyzed_at,
                "globalScore"       : result.global_score,
                "riskLevel"         : result.risk_level.value,
                "summary"           : result.summary,
                "clauseIssues"      : [issue.to_dict() for issue in result.clause_issues],
                "negotiationPoints" : [point.to_dict() for point in result.negotiation_points],
               }

    if result.file_size_bytes is not None:
        document["fileSize"] = result.file_size_bytes

    return document


def export_analysis_json(result: AnalysisResult) -> str:
    return json.dumps(export_analysis(result), ensure_ascii = False, indent = 2)


def export_file_name(result: AnalysisResult) -> str:
    """
    Download name for the export, derived from the analyzed source
    """
    stem = Path(result.source_identifier or "analysis").stem or "analysis"
    stem = "".join(ch if (ch.isalnum() or ch in "-_") else "_" for ch in stem)

    return f"contrascope_{stem}.json"
