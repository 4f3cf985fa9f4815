"""
PNG chunk: длина, тип, данные и CRC32.
Сериализация и разбор chunk в байтовом представлении.
"""

import struct
import zlib

from byte_cursor import ByteCursor


class Chunk:
    """Один chunk PNG файла"""

    def __init__(self, length: int, chunk_type: bytes, data: bytes, crc: int):
        if len(chunk_type) != 4:
            raise ValueError(f"Тип chunk должен быть 4 байта: {chunk_type!r}")
        self.length = length
        self.chunk_type = bytes(chunk_type)
        self.data = bytes(data)
        self.crc = crc

    @staticmethod
    def compute_crc(chunk_type: bytes, data: bytes) -> int:
        """Вычисляет CRC32 по типу и данным chunk"""
        return zlib.crc32(chunk_type + data) & 0xFFFFFFFF

    @classmethod
    def from_data(cls, chunk_type: bytes, data: bytes) -> 'Chunk':
        """Создаёт chunk, длина и CRC считаются автоматически"""
        return cls(len(data), chunk_type, data, cls.compute_crc(chunk_type, data))

    @classmethod
    def parse(cls, cursor: ByteCursor) -> 'Chunk':
        """Читает chunk из курсора как есть, CRC не пересчитывается"""
        length = cursor.take_u32_be()
        chunk_type = cursor.take(4)
        data = cursor.take(length)
        crc = cursor.take_u32_be()
        return cls(length, chunk_type, data, crc)

    @property
    def name(self) -> str:
        return self.chunk_type.decode('latin-1')

    def verify_crc(self) -> bool:
        """Проверяет, что сохранённый CRC совпадает с содержимым"""
        return self.compute_crc(self.chunk_type, self.data) == self.crc

    def total_wire_size(self) -> int:
        # Тип + данные + поле длины, без 4 байт CRC
        return self.length + 8

    def to_bytes(self) -> bytes:
        """Байтовое представление: длина + тип + данные + CRC"""
        return (
            struct.pack('>I', self.length)
            + self.chunk_type
            + self.data
            + struct.pack('>I', self.crc)
        )

    __hash__ = None

    def __eq__(self, other):
        if not isinstance(other, Chunk):
            return NotImplemented
        return (
            self.length == other.length
            and self.chunk_type == other.chunk_type
            and self.data == other.data
            and self.crc == other.crc
        )

    def __repr__(self):
        preview = self.data[:16].hex(' ')
        if len(self.data) > 16:
            preview += ' ...'
        return f"Chunk({self.name!r}, length={self.length}, crc=0x{self.crc:08X}, data=[{preview}])"
