# analysis/merger.py
import logging
from dataclasses import dataclass, replace

from autoebook.processor.models import (
    ChunkAnalysis,
    ContentType,
    DEFAULT_CONTENT_TYPE,
    ImageInsertionPoint,
    TOCEntry,
)
from autoebook.processor.toc import HeadingIdGenerator

logger = logging.getLogger(__name__)


@dataclass
class MergedAnalysis:
    table_of_contents: list[TOCEntry]
    image_points: list[ImageInsertionPoint]
    content_type: ContentType


def rebase_fragment(fragment: ChunkAnalysis, start_line: int) -> ChunkAnalysis:
    """
    Convierte las posiciones relativas al chunk en absolutas sumando start_line.
    Devuelve un fragmento nuevo; el original no se toca.
    """
    return ChunkAnalysis(
        table_of_contents=[
            replace(entry, position=entry.position + start_line)
            for entry in fragment.table_of_contents
        ],
        image_points=[
            replace(point, position=replace(point.position, line_number=point.position.line_number + start_line))
            for point in fragment.image_points
        ],
        content_type=fragment.content_type,
    )


def resolve_content_type(votes: list[ContentType]) -> ContentType:
    """
    Voto por pluralidad. En caso de empate gana el primer valor distinto
    encontrado en orden de chunk. Sin votos: el tipo por defecto.
    """
    counts: dict[ContentType, int] = {}
    first_seen: list[ContentType] = []
    for vote in votes:
        if vote not in counts:
            counts[vote] = 0
            first_seen.append(vote)
        counts[vote] += 1

    winner = DEFAULT_CONTENT_TYPE
    best = 0
    for candidate in first_seen:
        # estrictamente mayor: un empate nunca desplaza al que apareció antes
        if counts[candidate] > best:
            winner, best = candidate, counts[candidate]
    return winner


class ChunkResultMerger:
    """
    Acumula los fragmentos de análisis de cada chunk (en orden de chunk) y
    produce un único análisis del documento.

    Uso:
        merger = ChunkResultMerger()
        for chunk, fragment in zip(chunks, fragments):
            merger.add(fragment, chunk.start_line)
        merged = merger.merge()
    """

    def __init__(self):
        self._fragments: list[ChunkAnalysis] = []

    def __len__(self) -> int:
        return len(self._fragments)

    def add(self, fragment: ChunkAnalysis, start_line: int) -> None:
        self._fragments.append(rebase_fragment(fragment, start_line))

    def merge(self) -> MergedAnalysis:
        toc = _unique(
            (entry for fragment in self._fragments for entry in fragment.table_of_contents),
            key=lambda e: (e.position, e.level, e.title),
        )
        points = _unique(
            (point for fragment in self._fragments for point in fragment.image_points),
            key=lambda p: (p.position.line_number, p.position.section, p.generated_prompt),
        )

        # sort estable: a igual posición se respeta el orden de chunk
        toc.sort(key=lambda e: e.position)
        points.sort(key=lambda p: p.position.line_number)

        content_type = resolve_content_type([f.content_type for f in self._fragments])

        logger.debug(
            "Merge de %d fragmentos: %d entradas de TOC, %d puntos de imagen, tipo %s",
            len(self._fragments), len(toc), len(points), content_type.value,
        )

        return MergedAnalysis(
            table_of_contents=assign_toc_ids(toc),
            image_points=assign_image_ids(points),
            content_type=content_type,
        )


def assign_toc_ids(entries: list[TOCEntry]) -> list[TOCEntry]:
    """Ids deterministas, con la misma derivación que las anclas de headings."""
    ids = HeadingIdGenerator()
    return [replace(entry, id=ids.next_id(entry.title)) for entry in entries]


def assign_image_ids(points: list[ImageInsertionPoint]) -> list[ImageInsertionPoint]:
    return [replace(point, id=f"image-{n}") for n, point in enumerate(points, start=1)]


def _unique(items, key) -> list:
    # Un heading dentro de la ventana de overlap llega desde dos chunks
    seen = set()
    result = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
    return result
