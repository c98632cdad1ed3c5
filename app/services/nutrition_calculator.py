from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

Number = Union[int, float, Decimal]


class NutritionCalculator:
    MACROS = ("protein", "carbs", "fat")

    @staticmethod
    def round_half_up(value: Optional[Number]) -> int:
        """Округление до целого «как в школе» (0.5 -> 1), None -> 0"""
        if value is None:
            return 0
        return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @classmethod
    def macro_breakdown(
            cls,
            protein: Optional[Number],
            carbs: Optional[Number],
            fat: Optional[Number],
    ) -> Dict[str, int]:
        """Доля каждого макронутриента в процентах от суммарной массы БЖУ.

        Проценты округляются независимо, поэтому сумма может отличаться от 100.
        Если все три суммы нулевые, возвращается {0, 0, 0}.
        """
        grams = {
            "protein": float(protein or 0),
            "carbs": float(carbs or 0),
            "fat": float(fat or 0),
        }
        total = sum(grams.values())
        if total <= 0:
            return {macro: 0 for macro in cls.MACROS}

        return {
            macro: cls.round_half_up(grams[macro] / total * 100)
            for macro in cls.MACROS
        }
