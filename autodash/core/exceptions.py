class AutodashError(Exception):
    """Base exception for all autodash errors"""
    pass

class ConfigError(AutodashError):
    """Invalid or inconsistent global.json settings"""
    pass

class UnsupportedFormatError(AutodashError):
    """File extension is not one of the formats we can decode"""
    pass

class FileParseError(AutodashError):
    """
    The decoder could not turn the uploaded bytes into rows:
    malformed CSV, corrupt workbook, unreadable content, etc
    """
    pass

class EmptyFileError(FileParseError):
    """Decoding succeeded but produced no rows"""
    pass

class UploadInProgressError(AutodashError):
    """A second upload was started while the first one is still being parsed"""
    pass

class AuthError(AutodashError):
    """Rejected login / registration attempt"""
    pass

class UnknownTemplateError(AutodashError, KeyError):
    """No demo template with the requested id"""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Unknown template"
