import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkConfig:
    """Configuracion del chunker. Centralizada y explicita."""
    chunk_size: int = 8000          # caracteres por chunk (seguro para la mayoría de modelos)
    overlap: int = 500              # presupuesto de solapamiento entre chunks, en caracteres
    avg_line_length: int = 80       # longitud media de línea asumida para convertir overlap a líneas
    search_window: float = 0.3      # fracción final del buffer donde se busca un buen punto de corte

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError("chunk_size debe ser positivo")
        if self.overlap < 0:
            raise ValueError("overlap no puede ser negativo")
        if self.avg_line_length <= 0:
            raise ValueError("avg_line_length debe ser positivo")
        if not 0.0 <= self.search_window <= 1.0:
            raise ValueError("search_window debe estar entre 0 y 1")

    @property
    def overlap_lines(self) -> int:
        """
        Heurística: el overlap en caracteres se aproxima a un número de líneas
        asumiendo una longitud media fija. No es un solapamiento exacto en bytes.
        """
        return math.ceil(self.overlap / self.avg_line_length)
