from .pixel import BlendMode, BlendOp, PixelLayout, pack, unpack, RGBA, BGRA, ARGB
from .color import Color, to_color, to_pixel
from .canvas import Canvas, CanvasError, InvalidDimension, OutOfBounds
from .config import DEFAULTS, RenderConfig
from .drawing import draw_line, draw_polygon, fill_rectangle, fill_triangle
from .pool import BufferPool
from .postprocessing import PostProcessor, bloom, box_kernel, gaussian_blur, gaussian_kernel
from .transform import Transform, blit, copy, rotate, rotate_scaled
from .version import __version__
