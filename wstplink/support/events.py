
class EventSource(object):
    """ A list of handlers that are each called with the events fired. """

    def __init__(self):
        self._handlers = []

    def __iadd__(self, handler):
        return self.add(handler)

    def __isub__(self, handler):
        return self.remove(handler)

    def add(self, handler):
        self._handlers.append(handler)
        return self

    def remove(self, handler):
        if handler in self._handlers:
            self._handlers.remove(handler)
        return self

    def fire(self, *args, **kwargs):
        for handler in list(self._handlers):
            handler(*args, **kwargs)

    def fire_all(self, events):
        for e in events:
            self.fire(e)

    def clear_object_handlers(self, target):
        """ removes the bound methods of target """
        self._handlers = [h for h in self._handlers if getattr(h, '__self__', None) is not target]
