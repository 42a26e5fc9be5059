import os
from autoebook.processor.models import RawManuscript
from .base import BaseParser

_SUPPORTED_EXTENSIONS = {'.txt', '.md', '.markdown'}

_MAX_TITLE_WORDS = 10


class TxtParser(BaseParser):
    """
    Parser para archivos de texto plano y markdown.

    El texto se entrega tal cual (sin partir en secciones): la segmentación
    es responsabilidad del Chunker y del ChapterSplitter.

    El título se extrae, en orden de prioridad:
      - Primera línea si parece un título (≤10 palabras, sin punto final)
      - Nombre del archivo sin extensión
    """

    def can_handle(self, file_path: str) -> bool:
        _, ext = os.path.splitext(file_path)
        return ext.lower() in _SUPPORTED_EXTENSIONS

    def parse(self, file_path: str) -> RawManuscript:
        raw = self._read_file(file_path)
        return RawManuscript(
            title=self._extract_title(raw, file_path),
            source_path=file_path,
            text=raw,
        )

    # ------------------------------------------------------------------ #
    #  Helpers privados                                                    #
    # ------------------------------------------------------------------ #

    def _read_file(self, file_path: str) -> str:
        """Lee el archivo intentando UTF-8 primero, latin-1 como fallback."""
        try:
            with open(file_path, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except UnicodeDecodeError:
            with open(file_path, 'r', encoding='latin-1', newline='') as f:
                return f.read()

    def _extract_title(self, text: str, file_path: str) -> str:
        first_line = text.strip().split('\n')[0].strip().lstrip('#').strip()
        words = first_line.split()
        if words and len(words) <= _MAX_TITLE_WORDS and not first_line.endswith('.'):
            return first_line
        return os.path.splitext(os.path.basename(file_path))[0]
