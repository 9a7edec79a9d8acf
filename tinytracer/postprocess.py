"""
Постобработка: приведение цветов к диапазону [0, 1], квантование, сохранение изображений.
"""

import numpy as np
from PIL import Image


def tonemap(image):
    """
    Постобработка изображения:
    1. Если какой-то канал пикселя больше 1, все три канала делятся
       на максимальный (оттенок сохраняется)
    2. Отсечение значений в [0, 1]
    3. Перевод в 8 бит
    """
    image = image.copy()

    peak = image.max(axis=-1, keepdims=True)
    image = image / np.maximum(peak, 1.0)

    image = np.clip(image, 0, 1)
    return (image * 255).astype(np.uint8)


def save_image(filename, pixels, quality=100):
    """
    Сохранение изображения (формат определяется по расширению, обычно JPEG).

    Параметры:
        pixels: массив shape (height, width, 3), dtype uint8
        quality: качество JPEG (1..100)
    """
    img = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
    img.save(filename, quality=quality)
    print(f"Сохранено: {filename}")
