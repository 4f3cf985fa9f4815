"""
Чтение и запись PNG файлов без использования готовых библиотек.
Изображение хранится как последовательность chunk и сырые строки пикселей.
"""

import struct
import zlib
from typing import List, Optional

from byte_cursor import ByteCursor
from colour_type import ColourType
from png_chunk import Chunk

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'
IEND_CRC = 0xAE426082
IHDR_LENGTH = 13
IDAT_CHUNK_SIZE = 1024
COMPRESSION_LEVEL = 6


class FormatError(ValueError):
    """Некорректная структура PNG файла"""


def _ihdr_chunk(width: int, height: int, bit_depth: int, colour_code: int) -> Chunk:
    data = struct.pack('>II', width, height)  # Ширина и высота (big-endian)
    data += bytes([
        bit_depth,
        colour_code,
        0,  # Метод сжатия (deflate)
        0,  # Метод фильтрации
        0,  # Без чередования
    ])
    return Chunk.from_data(b'IHDR', data)


def split_idat(compressed: bytes) -> List[Chunk]:
    """Режет сжатый поток на IDAT chunk не больше IDAT_CHUNK_SIZE байт"""
    return [
        Chunk.from_data(b'IDAT', compressed[i:i + IDAT_CHUNK_SIZE])
        for i in range(0, len(compressed), IDAT_CHUNK_SIZE)
    ]


class PNGImage:
    """PNG изображение: IHDR, промежуточные chunk, строки пикселей, IEND"""

    signature = PNG_SIGNATURE

    def __init__(self, width: int, height: int, bit_depth: int, colour_code: int,
                 chunks: Optional[List[Chunk]] = None,
                 scanlines: Optional[List[bytearray]] = None):
        self.width = width
        self.height = height
        self.bit_depth = bit_depth
        self.colour_code = colour_code
        self.ihdr = _ihdr_chunk(width, height, bit_depth, colour_code)
        self.iend = Chunk(0, b'IEND', b'', IEND_CRC)
        self.chunks = list(chunks) if chunks else []
        self.scanlines = list(scanlines) if scanlines else []

    @classmethod
    def new(cls, width: int, height: int, bit_depth: int, colour_type: ColourType) -> 'PNGImage':
        """Создаёт пустое (белое) изображение"""
        if not colour_type.is_valid(bit_depth):
            raise ValueError(
                f"Глубина {bit_depth} недопустима для типа цвета {colour_type.name}"
            )
        if width < 1 or height < 1:
            raise ValueError(f"Неверные размеры изображения: {width}x{height}")

        image = cls(width, height, bit_depth, colour_type.wire_code)
        image.scanlines = [bytearray(b'\xff' * image.bytes_per_row) for _ in range(height)]
        return image

    @classmethod
    def from_file(cls, file_path: str) -> 'PNGImage':
        """Читает PNG файл целиком и разбирает его"""
        with open(file_path, 'rb') as f:
            data = f.read()
        return cls.from_bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'PNGImage':
        """Разбирает PNG из байтов"""
        cursor = ByteCursor(data)

        signature = cursor.take(len(PNG_SIGNATURE))
        if signature != PNG_SIGNATURE:
            # Не фатально, продолжаем разбор
            print(f"Неверная сигнатура PNG: {signature.hex(' ')}")

        chunks = []
        while not cursor.at_end():
            chunks.append(Chunk.parse(cursor))

        return cls.from_chunks(chunks)

    @classmethod
    def from_chunks(cls, chunks: List[Chunk]) -> 'PNGImage':
        """Собирает изображение из списка chunk, проверяя IHDR"""
        if not chunks or chunks[0].chunk_type != b'IHDR':
            raise FormatError("Первый chunk должен быть IHDR")

        ihdr = chunks[0]
        if ihdr.length != IHDR_LENGTH or len(ihdr.data) != IHDR_LENGTH:
            raise FormatError(f"Неверный размер IHDR: {ihdr.length}")
        if not ihdr.verify_crc():
            raise FormatError("Неверный CRC у IHDR")

        width, height = struct.unpack('>II', ihdr.data[:8])
        bit_depth = ihdr.data[8]
        colour_code = ihdr.data[9]

        # Последний chunk отбрасывается, даже если это не IEND
        if len(chunks) > 1 and chunks[-1].chunk_type != b'IEND':
            print(f"Последний chunk не IEND: {chunks[-1].name!r}")
        elif len(chunks) == 1:
            print("Отсутствует chunk IEND")

        return cls(width, height, bit_depth, colour_code, chunks=chunks[1:-1])

    @property
    def bytes_per_row(self) -> int:
        # Количество каналов не учитывается
        bits_per_row = self.width * self.bit_depth
        return (bits_per_row + 7) // 8

    @property
    def colour_type(self) -> Optional[ColourType]:
        try:
            return ColourType.from_code(self.colour_code)
        except ValueError:
            return None

    def put_pixel(self, value: int, x: int, y: int):
        """Устанавливает или сбрасывает бит пикселя (1 бит на пиксель)"""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Координаты вне изображения: ({x}, {y})")
        mask = 0x80 >> (x % 8)
        row = self.scanlines[y]
        if value & 1:
            row[x // 8] |= mask
        else:
            row[x // 8] &= ~mask & 0xFF

    def get_pixel(self, x: int, y: int) -> int:
        """Читает бит пикселя (1 бит на пиксель)"""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Координаты вне изображения: ({x}, {y})")
        return (self.scanlines[y][x // 8] >> (7 - x % 8)) & 1

    def prepare_image_data(self) -> bytes:
        """Строки пикселей с байтом фильтра 0 перед каждой"""
        row_len = len(self.scanlines[0])
        image_data = bytearray()

        for row in self.scanlines:
            if len(row) != row_len:
                raise ValueError(f"Строки разной длины: {len(row)} и {row_len}")
            # Фильтр: None (0) - без фильтрации
            image_data.append(0)
            image_data.extend(row)

        return bytes(image_data)

    def create_idat_chunks(self) -> List[Chunk]:
        """Сжимает данные и режет их на IDAT chunk по IDAT_CHUNK_SIZE байт"""
        compressed = zlib.compress(self.prepare_image_data(), level=COMPRESSION_LEVEL)
        return split_idat(compressed)

    def idat_chunks(self) -> List[Chunk]:
        return [chunk for chunk in self.chunks if chunk.chunk_type == b'IDAT']

    def decompress_idat(self) -> bytes:
        """Распаковывает сохранённые IDAT (строки вместе с байтами фильтра)"""
        return zlib.decompress(b''.join(chunk.data for chunk in self.idat_chunks()))

    def bad_crc_chunks(self) -> List[Chunk]:
        """Промежуточные chunk с неверным CRC (при чтении проверяется только IHDR)"""
        return [chunk for chunk in self.chunks if not chunk.verify_crc()]

    def to_bytes(self) -> bytes:
        """Собирает PNG файл в байты"""
        output = bytearray(self.signature)
        output += self.ihdr.to_bytes()

        for chunk in self.chunks:
            output += chunk.to_bytes()

        # У прочитанного из файла изображения данные уже лежат в IDAT среди chunks
        if self.scanlines:
            for chunk in self.create_idat_chunks():
                output += chunk.to_bytes()

        output += self.iend.to_bytes()
        return bytes(output)

    def save(self, file_path: str):
        """Записывает PNG файл"""
        data = self.to_bytes()
        with open(file_path, 'wb') as f:
            f.write(data)
