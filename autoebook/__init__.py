"""AutoEbook: segmentación y análisis estructural de manuscritos."""
from autoebook.analysis.merger import ChunkResultMerger
from autoebook.orchestrator import AnalysisResult, ManuscriptAnalyzer
from autoebook.processor.chapters import split_by_chapters, split_into_chapters
from autoebook.processor.chunker.chunker import Chunker, needs_chunking, split_into_chunks
from autoebook.processor.chunker.models import ChunkConfig
from autoebook.processor.headings.classifier import classify_heading
from autoebook.processor.preprocessor import PreprocessOptions, preprocess_content
from autoebook.processor.readability import analyze_readability
from autoebook.processor.toc import extract_table_of_contents

__all__ = [
    "AnalysisResult",
    "ChunkConfig",
    "ChunkResultMerger",
    "Chunker",
    "ManuscriptAnalyzer",
    "PreprocessOptions",
    "analyze_readability",
    "classify_heading",
    "extract_table_of_contents",
    "needs_chunking",
    "preprocess_content",
    "split_by_chapters",
    "split_into_chapters",
    "split_into_chunks",
]
