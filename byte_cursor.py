"""
Последовательное чтение байтов из буфера в памяти.
"""

import struct


class ByteCursor:
    """Курсор для чтения байтов только вперёд"""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.position = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.position

    def at_end(self) -> bool:
        return self.position >= len(self.data)

    def take(self, count: int) -> bytes:
        """Читает count байт и сдвигает курсор"""
        if count < 0:
            raise ValueError(f"Отрицательное количество байт: {count}")
        if count > self.remaining:
            raise EOFError(
                f"Неожиданный конец данных: нужно {count} байт, осталось {self.remaining}"
            )
        chunk = self.data[self.position:self.position + count]
        self.position += count
        return chunk

    def take_byte(self) -> int:
        """Читает один байт"""
        return self.take(1)[0]

    def take_u32_be(self) -> int:
        """Читает 32-битное беззнаковое число (big-endian)"""
        return struct.unpack('>I', self.take(4))[0]
