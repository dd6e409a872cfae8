from .image import DEFAULT_COLOR, decode, encode, generate_default_image

__all__ = ['DEFAULT_COLOR', 'decode', 'encode', 'generate_default_image']
