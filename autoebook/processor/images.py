# processor/images.py
import re
from dataclasses import dataclass

_MARKDOWN_HEADING_RE = re.compile(r'^#{1,6}\s')

# Sugerir una imagen cada N párrafos dentro de una sección
_PARAGRAPHS_PER_IMAGE = 3


@dataclass
class ImagePlacement:
    line_number: int
    image_url: str
    alt: str


def find_image_insertion_points(markdown: str) -> list[int]:
    """
    Heurística local (sin IA): índices de línea (base 0) donde termina
    cada tercer párrafo de una sección. El contador se reinicia en cada heading.
    """
    lines = markdown.split("\n")
    points: list[int] = []
    paragraphs = 0

    for i, line in enumerate(lines):
        if _MARKDOWN_HEADING_RE.match(line):
            paragraphs = 0
            continue

        # fin de párrafo: línea vacía tras una línea con texto
        previous = lines[i - 1] if i > 0 else ""
        if not line.strip() and previous.strip() and not _MARKDOWN_HEADING_RE.match(previous):
            paragraphs += 1
            if paragraphs % _PARAGRAPHS_PER_IMAGE == 0:
                points.append(i)

    return points


def insert_images_into_markdown(markdown: str, images: list[ImagePlacement]) -> str:
    """
    Inserta bloques ![alt](url) en las líneas indicadas. Se procesan de la
    última a la primera para que cada inserción no desplace a las anteriores.
    """
    lines = markdown.split("\n")

    for image in sorted(images, key=lambda img: img.line_number, reverse=True):
        index = min(max(image.line_number, 0), len(lines))
        lines.insert(index, f"\n![{image.alt}]({image.image_url})\n")

    return "\n".join(lines)
