class Font2BytesError(Exception):
    pass


class SizeMismatch(Font2BytesError, ValueError):
    pass


class UnknownFormat(Font2BytesError, ValueError):
    pass


class ReaderError(Font2BytesError):
    pass


class DocumentError(Font2BytesError):
    pass


class InvalidSize(Font2BytesError, ValueError):
    pass
