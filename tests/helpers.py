"""
Test doubles for the host collaborators: an in-memory transport that
records calls and lets the test fire callbacks, and a sink that records
host log calls.
"""

from fx4ctl.communication.rest_format import RestResponse, RestResult
from fx4ctl.communication.transport import RestTransport


class FakeTransport(RestTransport):
    """Records rest/rest_get calls; replies immediately if `reply` is set"""
    
    def __init__(self, reply=None):
        self.reply = reply
        self.calls = []
        self.callbacks = []
        self.closed = False
    
    def rest(self, url, body, callback, headers=None):
        self.calls.append(('POST', url, body, headers))
        self._register(callback)
    
    def rest_get(self, url, callback, headers=None):
        self.calls.append(('GET', url, None, headers))
        self._register(callback)
    
    def _register(self, callback):
        self.callbacks.append(callback)
        if self.reply is not None:
            callback(*self.reply)
    
    def respond(self, error, result, index=-1):
        """Fire the callback of a recorded call"""
        self.callbacks[index](error, result)
    
    def close(self):
        self.closed = True


class RecordingSink:
    """Host log sink that keeps (level, message) pairs"""
    
    def __init__(self):
        self.records = []
    
    def log(self, level, message):
        self.records.append((level, message))
    
    def errors(self):
        return [message for level, message in self.records if level == 'error']


def ok(data=b""):
    """A 200 result carrying `data`"""
    return RestResult(response=RestResponse(200, "OK"), data=data)
