class RealtimeError(Exception):
    """Base for rejected client actions.

    The message is the text sent back to the client in an ``error`` event.
    """
    message = 'Request rejected'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidIdentity(RealtimeError):
    message = 'Invalid username'


class NotJoined(RealtimeError):
    message = 'You must join the chat first'


class InvalidMessage(RealtimeError):
    message = 'Invalid message'


class InvalidScore(RealtimeError):
    message = 'Invalid score'
