from docingest.analysis.cancellation import CancellationToken
from docingest.analysis.factory import AnalysisClientFactory
from docingest.analysis.models import AnalysisJobHandle, AnalysisResult, AnalysisStatus
from docingest.analysis.poller import AnalysisPoller
from docingest.analysis.submitter import AnalysisSubmitter

__all__ = [
    "AnalysisClientFactory",
    "AnalysisJobHandle",
    "AnalysisPoller",
    "AnalysisResult",
    "AnalysisStatus",
    "AnalysisSubmitter",
    "CancellationToken",
]
