import enum


class ImageType(str, enum.Enum):
    base = 'base'
    browser = 'browser'
    included = 'included'
