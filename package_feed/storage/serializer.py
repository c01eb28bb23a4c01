from abc import ABC, abstractmethod
from typing import BinaryIO, Iterable, List, Union

from package_feed.domain.models import ServerPackage


class PackagesSerializer(ABC):
    """
    Abstract base class for package list serializers.

    Implementations are stateless apart from their settings: any number of
    encode/decode calls may run at the same time on independent inputs.
    """

    @abstractmethod
    def encode(self, packages: Iterable[ServerPackage]) -> bytes:
        """Encode packages, in order, to bytes. An empty input is valid."""
        pass

    @abstractmethod
    def decode(self, data: Union[bytes, str]) -> List[ServerPackage]:
        """
        Decode bytes produced by :meth:`encode` back into packages.
        Either every package is returned, in written order, or ParseError is raised.
        """
        pass

    def serialize(self, packages: Iterable[ServerPackage], stream: BinaryIO) -> None:
        """Write encoded packages to a binary stream at its current position."""
        stream.write(self.encode(packages))

    def deserialize(self, stream: BinaryIO) -> List[ServerPackage]:
        """Read packages from a binary stream, starting at its current position."""
        return self.decode(stream.read())
