import pyglet
from pyglet import gl
from pyglet.image import ImageData, Texture
from pyglet.window import Window, key

from .raster import PackedBitmap
from .view import rgba_pixels

__all__ = ["Display", "run"]


def run(bitmap: PackedBitmap, *, scale: int, caption: str):
    Display(bitmap, scale=scale, caption=caption)
    pyglet.app.run()


class Display(Window):
    PADDING = 10

    BACKGROUND = (0.1, 0.1, 0.1, 1.0)

    bitmap: PackedBitmap
    scale: int
    img: ImageData

    def __init__(self, bitmap: PackedBitmap, *, scale: int, caption: str):
        self.bitmap = bitmap
        self.scale = max(1, scale)

        super().__init__(
            width=bitmap.width * self.scale + 2 * self.PADDING,
            height=bitmap.height * self.scale + 2 * self.PADDING,
            caption=f"{caption} ({bitmap.width}x{bitmap.height})",
        )

        Texture.default_min_filter = Texture.default_mag_filter = gl.GL_NEAREST
        self.img = ImageData(
            bitmap.width,
            bitmap.height,
            "RGBA",
            rgba_pixels(bitmap),
        )

    def on_draw(self):  # pyright: reportIncompatibleMethodOverride=none
        gl.glClearColor(*self.BACKGROUND)
        self.clear()
        self.img.blit(
            self.PADDING,
            self.PADDING,
            width=self.bitmap.width * self.scale,
            height=self.bitmap.height * self.scale,
        )

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.ESCAPE:
            self.dispatch_event("on_close")
