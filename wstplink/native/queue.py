"""
A thread-safe queue of tokens, used as one direction of an in-process link.
"""
import threading
from collections import deque


class TokenQueue:
    """ A FIFO of (tag, payload) tokens. Readers may block until a token arrives or the queue is closed.
    :param capacity the maximum number of queued tokens. 0 means no limit.
    """

    def __init__(self, capacity=0):
        self._tokens = deque()
        self._capacity = capacity
        self._closed = False
        self._changed = threading.Condition()

    def __len__(self):
        with self._changed:
            return len(self._tokens)

    @property
    def closed(self) -> bool:
        return self._closed

    def put_all(self, tokens) -> bool:
        """
        Appends tokens to the queue.
        :return: False if the queue is closed or there is no room for all the tokens. Nothing is
            added in that case.
        """
        with self._changed:
            if self._closed:
                return False
            if self._capacity and len(self._tokens) + len(tokens) > self._capacity:
                return False
            self._tokens.extend(tokens)
            self._changed.notify_all()
            return True

    def peek(self, index=0, block=False):
        """ retrieves the token at index without removing it, or None if there is no such token. """
        with self._changed:
            if block:
                self._wait_for(index)
            return self._tokens[index] if len(self._tokens) > index else None

    def take(self, block=False):
        """ removes and returns the first token, or None if the queue is empty. """
        with self._changed:
            if block:
                self._wait_for(0)
            return self._tokens.popleft() if self._tokens else None

    def _wait_for(self, index):
        while len(self._tokens) <= index and not self._closed:
            self._changed.wait()

    def close(self):
        """ wakes any blocked readers. Queued tokens can still be read. """
        with self._changed:
            self._closed = True
            self._changed.notify_all()
