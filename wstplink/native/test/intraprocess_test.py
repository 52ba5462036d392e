import unittest
from unittest.mock import Mock

from hamcrest import assert_that, is_, equal_to, none, not_none

from wstplink.native import constants as c
from wstplink.native.intraprocess import IntraProcessTransport, open_loopback


class LoopbackRawLinkTest(unittest.TestCase):

    def setUp(self):
        self.sut = open_loopback()

    def tearDown(self):
        self.sut.close()

    def test_properties(self):
        assert_that(self.sut.name(), is_('loopback'))
        assert_that(self.sut.is_loopback(), is_(True))
        assert_that(self.sut.ready(), is_(False))
        assert_that(self.sut.activate(), is_(1))

    def test_reads_back_what_is_written(self):
        assert_that(self.sut.put_integer64(42), is_(1))
        assert_that(self.sut.ready(), is_(True))
        assert_that(self.sut.get_next(), is_(c.TKINT))
        assert_that(self.sut.get_integer64(), is_((1, 42)))
        assert_that(self.sut.ready(), is_(False))

    def test_read_from_empty_link_fails_without_blocking(self):
        assert_that(self.sut.get_next(), is_(c.TKERR))
        assert_that(self.sut.error(), is_(c.EGSEQ))
        assert_that(self.sut.error_message(), is_(c.ERROR_MESSAGES[c.EGSEQ]))

    def test_read_of_wrong_type_fails(self):
        self.sut.put_string("a")
        assert_that(self.sut.get_integer64(), is_((0, None)))
        assert_that(self.sut.error(), is_(c.EGSEQ))

    def test_error_is_sticky_until_cleared(self):
        self.sut.get_next()
        assert_that(self.sut.put_integer64(1), is_(0))
        assert_that(self.sut.error(), is_(c.EGSEQ))
        assert_that(self.sut.clear_error(), is_(1))
        assert_that(self.sut.error(), is_(c.EOK))
        assert_that(self.sut.put_integer64(1), is_(1))

    def test_released_message_is_not_reported_again(self):
        self.sut.get_next()
        message = self.sut.error_message()
        self.sut.release_error_message(message)
        assert_that(self.sut.error_message(), is_(none()))
        assert_that(self.sut.error(), is_(c.EGSEQ))

    def test_integer_out_of_range(self):
        assert_that(self.sut.put_integer64(c.INT64_MAX), is_(1))
        assert_that(self.sut.put_integer64(c.INT64_MAX + 1), is_(0))
        assert_that(self.sut.error(), is_(c.EOVFL))

    def test_put_bad_payload_types(self):
        assert_that(self.sut.put_string(b"bytes"), is_(0))
        assert_that(self.sut.error(), is_(c.EPBTK))
        self.sut.clear_error()
        assert_that(self.sut.put_real64("1.0"), is_(0))
        assert_that(self.sut.error(), is_(c.EPBTK))

    def test_put_type_only_accepts_function(self):
        assert_that(self.sut.put_type(c.TKINT), is_(0))
        assert_that(self.sut.error(), is_(c.EPBTK))

    def test_arg_count_must_follow_function_type(self):
        assert_that(self.sut.put_arg_count(2), is_(0))
        assert_that(self.sut.error(), is_(c.EPSEQ))

    def test_token_written_between_type_and_count_fails(self):
        self.sut.put_type(c.TKFUNC)
        assert_that(self.sut.put_integer64(1), is_(0))
        assert_that(self.sut.error(), is_(c.EPSEQ))

    def test_function_token(self):
        self.sut.put_type(c.TKFUNC)
        self.sut.put_arg_count(2)
        assert_that(self.sut.get_next(), is_(c.TKFUNC))
        assert_that(self.sut.get_arg_count(), is_((1, 2)))

    def test_new_packet_skips_rest_of_object(self):
        self.write_list(1, 2, 3)
        self.sut.put_integer64(9)
        self.sut.get_next()
        self.sut.get_arg_count()
        self.sut.get_symbol()
        assert_that(self.sut.get_integer64(), is_((1, 1)))
        assert_that(self.sut.new_packet(), is_(1))
        assert_that(self.sut.get_integer64(), is_((1, 9)))

    def test_new_packet_skips_object_at_cursor(self):
        self.write_list(1, 2)
        self.sut.put_integer64(9)
        assert_that(self.sut.get_next(), is_(c.TKFUNC))
        self.sut.new_packet()
        assert_that(self.sut.get_integer64(), is_((1, 9)))

    def test_new_packet_at_boundary_does_nothing(self):
        self.sut.put_integer64(9)
        self.sut.new_packet()
        assert_that(self.sut.get_integer64(), is_((1, 9)))

    def test_next_packet(self):
        self.write_packet('System`ReturnPacket', 7)
        assert_that(self.sut.next_packet(), is_(c.RETURNPKT))
        assert_that(self.sut.get_integer64(), is_((1, 7)))

    def test_next_packet_unknown_head(self):
        self.write_packet('Global`Unknown', 7)
        assert_that(self.sut.next_packet(), is_(c.ILLEGALPKT))
        assert_that(self.sut.error(), is_(c.EUNKNOWNPACKET))

    def test_next_packet_with_unread_data(self):
        self.write_packet('System`ReturnPacket', 7)
        self.write_packet('System`ReturnPacket', 8)
        self.sut.next_packet()
        assert_that(self.sut.next_packet(), is_(c.ILLEGALPKT))
        assert_that(self.sut.error(), is_(c.ENEXTPACKET))

    def test_capacity(self):
        sut = open_loopback(capacity=1)
        assert_that(sut.put_integer64(1), is_(1))
        assert_that(sut.put_integer64(2), is_(0))
        assert_that(sut.error(), is_(c.EMEM))

    def test_transfer_expression(self):
        dest = open_loopback()
        self.write_list(1, 2)
        self.sut.put_integer64(9)
        assert_that(self.sut.transfer_expression(dest), is_(1))
        assert_that(dest.get_arg_count(), is_((1, 2)))
        assert_that(dest.get_symbol(), is_((1, 'System`List')))
        assert_that(dest.get_integer64(), is_((1, 1)))
        assert_that(dest.get_integer64(), is_((1, 2)))
        assert_that(dest.ready(), is_(False))
        assert_that(self.sut.get_integer64(), is_((1, 9)))

    def test_transfer_failure_on_destination_is_reported_on_source(self):
        dest = Mock()
        dest.put_integer64.return_value = 0
        dest.error.return_value = c.ECLOSED
        self.sut.put_integer64(1)
        assert_that(self.sut.transfer_expression(dest), is_(0))
        assert_that(self.sut.error(), is_(c.ECLOSED))

    def test_transfer_from_empty_link(self):
        assert_that(self.sut.transfer_expression(open_loopback()), is_(0))
        assert_that(self.sut.error(), is_(c.EGSEQ))

    def test_closed_link(self):
        self.sut.close()
        self.sut.close()
        assert_that(self.sut.ready(), is_(False))
        assert_that(self.sut.put_integer64(1), is_(0))
        assert_that(self.sut.error(), is_(c.EDEAD))

    def write_list(self, *values):
        self.sut.put_type(c.TKFUNC)
        self.sut.put_arg_count(len(values))
        self.sut.put_symbol('System`List')
        for v in values:
            self.sut.put_integer64(v)

    def write_packet(self, head, value):
        self.sut.put_type(c.TKFUNC)
        self.sut.put_arg_count(1)
        self.sut.put_symbol(head)
        self.sut.put_integer64(value)


class IntraProcessTransportTest(unittest.TestCase):

    def setUp(self):
        self.sut = IntraProcessTransport()

    def test_listen_and_connect(self):
        listener, err = self.sut.open('listen', 'a', [], 0)
        assert_that(err, is_(c.EOK))
        assert_that(listener.attached, is_(False))
        connector, err = self.sut.open('connect', 'a', [], 0)
        assert_that(err, is_(c.EOK))
        assert_that(listener.attached, is_(True))
        assert_that(self.sut.listening(), is_(['a']))

    def test_links_must_be_activated(self):
        listener, _ = self.sut.open('listen', 'a', [], 0)
        connector, _ = self.sut.open('connect', 'a', [], 0)
        assert_that(connector.put_integer64(1), is_(0))
        assert_that(connector.error(), is_(c.ECONNECT))

    def test_writes_are_sent_on_flush(self):
        listener, _ = self.sut.open('listen', 'a', [], 0)
        connector, _ = self.sut.open('connect', 'a', [], 0)
        connector.activate()
        listener.activate()
        connector.put_integer64(5)
        assert_that(listener.ready(), is_(False))
        assert_that(connector.flush(), is_(1))
        assert_that(listener.ready(), is_(True))
        assert_that(listener.get_integer64(), is_((1, 5)))

    def test_peer_close(self):
        listener, _ = self.sut.open('listen', 'a', [], 0)
        connector, _ = self.sut.open('connect', 'a', [], 0)
        connector.activate()
        listener.activate()
        connector.put_integer64(5)
        connector.close()
        assert_that(listener.get_integer64(), is_((1, 5)))
        assert_that(listener.get_next(), is_(c.TKERR))
        assert_that(listener.error(), is_(c.ECLOSED))

    def test_name_in_use(self):
        self.sut.open('listen', 'a', [], 0)
        link, err = self.sut.open('listen', 'a', [], 0)
        assert_that(link, is_(none()))
        assert_that(err, is_(c.ENAME))

    def test_name_released_on_close(self):
        listener, _ = self.sut.open('listen', 'a', [], 0)
        listener.close()
        assert_that(self.sut.listening(), is_([]))
        link, err = self.sut.open('listen', 'a', [], 0)
        assert_that(link, is_(not_none()))

    def test_connect_without_listener(self):
        link, err = self.sut.open('connect', 'nobody', [], 0)
        assert_that(link, is_(none()))
        assert_that(err, is_(c.ECONNECT))

    def test_single_connection_per_listener(self):
        self.sut.open('listen', 'a', [], 0)
        self.sut.open('connect', 'a', [], 0)
        link, err = self.sut.open('connect', 'a', [], 0)
        assert_that(err, is_(equal_to(c.ECONNECT)))

    def test_unknown_mode(self):
        link, err = self.sut.open('launch', 'a', [], 0)
        assert_that(err, is_(c.EMODE))

    def test_closing_listener_ends_activation(self):
        listener, _ = self.sut.open('listen', 'a', [], 0)
        listener.close()
        assert_that(listener.activate(), is_(0))
        assert_that(listener.error(), is_(c.EDEAD))
