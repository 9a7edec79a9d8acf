"""
Трассировщик лучей: сферы, треугольные сетки, шахматная плоскость и карта окружения.
"""
