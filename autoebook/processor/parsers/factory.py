import os
from autoebook.processor.models import RawManuscript
from .base import BaseParser
from .txt_parser import TxtParser


class UnsupportedFormatError(Exception):
    """Se lanza cuando ningún parser registrado puede manejar el archivo."""
    pass


class ParserFactory:
    """
    Registro central de parsers.

    Uso básico:
        manuscript = ParserFactory.parse_file("/ruta/al/manuscrito.md")

    Uso con parser registrado externamente:
        factory = ParserFactory()
        factory.register(MiParserCustom())
        manuscript = factory.parse("/ruta/al/manuscrito.txt")

    Los parsers se evalúan en orden de registro.
    El primero que responda True a can_handle() gana.
    """

    # Parsers disponibles por defecto, en orden de prioridad
    _DEFAULT_PARSERS: list[BaseParser] = [
        TxtParser(),
    ]

    def __init__(self):
        self._parsers: list[BaseParser] = list(self._DEFAULT_PARSERS)

    def register(self, parser: BaseParser) -> None:
        """Registra un parser adicional al inicio de la lista (mayor prioridad)."""
        self._parsers.insert(0, parser)

    def parse(self, file_path: str) -> RawManuscript:
        """
        Detecta el parser correcto para el archivo y devuelve un RawManuscript.

        Raises:
            FileNotFoundError: si el archivo no existe.
            UnsupportedFormatError: si ningún parser puede manejarlo.
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Archivo no encontrado: {file_path}")

        for parser in self._parsers:
            if parser.can_handle(file_path):
                return parser.parse(file_path)

        ext = os.path.splitext(file_path)[1].lower()
        raise UnsupportedFormatError(
            f"Formato '{ext}' no soportado. "
            f"Formatos disponibles: .txt, .md, .markdown"
        )

    # ------------------------------------------------------------------ #
    #  Método de clase para uso rápido sin instanciar                     #
    # ------------------------------------------------------------------ #

    @classmethod
    def parse_file(cls, file_path: str) -> RawManuscript:
        """Shortcut: ParserFactory.parse_file('manuscrito.md')"""
        return cls().parse(file_path)
