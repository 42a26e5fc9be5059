from dataclasses import dataclass, field
from enum import Enum


class ContentType(Enum):
    FICTION = "fiction"
    NON_FICTION = "non-fiction"
    TECHNICAL = "technical"
    EDUCATIONAL = "educational"


class ImageType(Enum):
    ILLUSTRATION = "illustration"
    DIAGRAM = "diagram"
    CHART = "chart"
    INFOGRAPHIC = "infographic"


DEFAULT_CONTENT_TYPE = ContentType.NON_FICTION


@dataclass
class RawManuscript:
    """Lo que sale de cualquier Parser: texto completo + metadata"""
    title: str
    source_path: str
    text: str


#los chunks: unidades de trabajo para el colaborador de IA
@dataclass
class ContentChunk:
    """
    Fragmento acotado del manuscrito.
    start_line / end_line son offsets absolutos (base 0) en el documento original,
    incluyendo la ventana de solapamiento heredada del chunk anterior.
    """
    index: int
    content: str
    start_line: int
    end_line: int
    is_first: bool
    is_last: bool

    @property
    def lines(self) -> list[str]:
        return self.content.split("\n")


@dataclass(frozen=True)
class HeadingMatch:
    is_heading: bool
    title: str = ""
    level: int = 0


NOT_A_HEADING = HeadingMatch(is_heading=False)


@dataclass
class TOCEntry:
    id: str
    title: str
    level: int
    position: int   # número de línea absoluto (base 1)


@dataclass
class ImagePosition:
    section: str
    after_paragraph: int
    line_number: int


@dataclass
class ImageInsertionPoint:
    id: str
    position: ImagePosition
    suggested_type: ImageType
    context: str
    generated_prompt: str
    approved: bool = False   # estado del llamador, este motor nunca lo toca


@dataclass
class ReadabilityReport:
    issues: list[str] = field(default_factory=list)
    score: int = 100
    suggestions: list[str] = field(default_factory=list)


@dataclass
class Chapter:
    title: str
    content: str
    level: int
    start_line: int
    synthetic: bool = False   # True para el capítulo de introducción o de respaldo


@dataclass
class ChunkAnalysis:
    """
    Fragmento de análisis devuelto por el colaborador para UN chunk.
    Las posiciones son relativas al chunk hasta que el merger las rebasa.
    """
    table_of_contents: list[TOCEntry] = field(default_factory=list)
    image_points: list[ImageInsertionPoint] = field(default_factory=list)
    content_type: ContentType = DEFAULT_CONTENT_TYPE

    @classmethod
    def empty(cls) -> "ChunkAnalysis":
        """Fragmento vacío pero estructuralmente válido (chunk fallido)."""
        return cls()


@dataclass
class ContentAnalysis:
    word_count: int
    estimated_pages: int
    content_type: ContentType
    table_of_contents: list[TOCEntry]
    image_points: list[ImageInsertionPoint]


@dataclass
class ChunkHints:
    """Pistas posicionales que acompañan a cada chunk hacia el colaborador."""
    start_line: int
    end_line: int
    is_first: bool
    is_last: bool
