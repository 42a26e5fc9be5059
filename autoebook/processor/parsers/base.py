from abc import ABC, abstractmethod
from autoebook.processor.models import RawManuscript


class BaseParser(ABC):
    @abstractmethod
    def can_handle(self, file_path: str) -> bool:
        """Devuelve True si el parser puede manejar el archivo"""
        raise NotImplementedError

    @abstractmethod
    def parse(self, file_path: str) -> RawManuscript:
        """Parsea el archivo y devuelve un RawManuscript con el texto completo"""
        raise NotImplementedError
