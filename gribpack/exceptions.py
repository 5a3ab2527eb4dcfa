class GribPackException(Exception):
    '''Base class to extend in order to throw exception in gribpack.

    It takes the message and, optionally, the number (of the template or of
    the section) that caused the exception, so that the caller can decide
    to skip only the offending field.
    '''

    def __init__(self, message='', number=None):
        self.number = number
        super().__init__(message)


class TemplateNotFound(GribPackException):
    '''The template number is not registered for the requested category.'''
    pass


class WrongSectionNumber(GribPackException):
    pass


class CorruptSection(GribPackException):
    pass


class IncompatibleGridTemplate(GribPackException):
    '''The Grid Definition Template can't be used with the Data Representation
    Template requested (like 5.51 that needs one of 3.50 through 3.53).'''
    pass


class UnsupportedTemplate(GribPackException):
    '''Known template whose algorithm is not available.'''
    pass


class AllocationFailure(GribPackException):
    '''This is useful when is not possible to allocate the intermediate
    buffers: it is never retried.'''
    pass


class EncodeFailure(GribPackException):
    pass


class DecodeFailure(GribPackException):
    pass


class BitStreamError(GribPackException, ValueError):
    '''Precondition violation on a bit access (width, offset or bounds).'''
    pass
