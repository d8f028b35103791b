class FwstructException(Exception):
    '''Base class to extend in order to throw exception in fwstruct.

    It takes an optional human readable message and the chain of the layer
    that caused the exception: the chain is extended with the name of each
    field the exception passes through while propagating upward.
    '''

    def __init__(self, msg=None, chain=None):
        self.msg = msg
        self.chain = chain if chain is not None else []
        super().__init__(msg)

    def __str__(self):
        msg = self.msg or self.__class__.__name__
        if not self.chain:
            return msg

        return '%s (at %s)' % (msg, '.'.join(reversed(self.chain)))


class UnpackException(FwstructException):
    pass


class OutOfBoundsException(UnpackException):
    '''A read would go past the end of the data available.'''
    pass


class FirmwareException(FwstructException):
    '''The data is structurally readable but it's not a valid firmware.'''
    pass


class TooSmallException(FirmwareException):
    pass


class TagTooLargeException(FirmwareException):
    pass


class DuplicateImageException(FirmwareException):
    pass


class EmptyChunkException(FirmwareException):
    pass


class TooManyChunksException(FirmwareException):
    pass


class PayloadUnavailableException(FirmwareException):
    pass
