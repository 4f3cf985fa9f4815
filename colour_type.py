"""
Типы цвета PNG и допустимые для них глубины цвета.
"""

from enum import Enum


class ColourType(Enum):
    """Тип цвета: код в IHDR и допустимые глубины"""

    GRAYSCALE = (0, frozenset({1, 2, 4, 8, 16}))
    RGB = (2, frozenset({8, 16}))
    PALETTE = (3, frozenset({1, 2, 4, 8}))
    GRAYSCALE_ALPHA = (4, frozenset({8, 16}))
    RGB_ALPHA = (6, frozenset({8, 16}))

    @property
    def wire_code(self) -> int:
        return self.value[0]

    @property
    def legal_bit_depths(self) -> frozenset:
        return self.value[1]

    def is_valid(self, bit_depth: int) -> bool:
        return bit_depth in self.legal_bit_depths

    @classmethod
    def from_code(cls, code: int) -> 'ColourType':
        """Находит тип цвета по коду из IHDR"""
        for colour_type in cls:
            if colour_type.wire_code == code:
                return colour_type
        raise ValueError(f"Неизвестный тип цвета: {code}")
