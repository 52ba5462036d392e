import unittest
from unittest.mock import patch

from hamcrest import assert_that, is_, calling, raises, same_instance, is_not, instance_of

from wstplink import env
from wstplink.config.config import ConfigError
from wstplink.errors import TransportError
from wstplink.native.constants import EINIT
from wstplink.native.env import RawEnvironment


class StdEnvTest(unittest.TestCase):

    def setUp(self):
        env.deinitialize()

    def tearDown(self):
        env.deinitialize()

    def test_environment_is_shared(self):
        first = env.stdenv()
        assert_that(first, is_(instance_of(RawEnvironment)))
        assert_that(env.stdenv(), is_(same_instance(first)))

    def test_deinitialize_releases_environment(self):
        first = env.stdenv()
        env.deinitialize()
        assert_that(first.initialized, is_(False))
        assert_that(env.stdenv(), is_not(same_instance(first)))

    @patch('wstplink.env.native_env.initialize')
    def test_initialization_error_is_kept(self, initialize):
        initialize.return_value = (None, EINIT)
        assert_that(calling(env.stdenv), raises(TransportError, "initialize"))
        assert_that(calling(env.stdenv), raises(TransportError))
        initialize.assert_called_once()

    @patch('wstplink.env.native_env.initialize')
    def test_deinitialize_clears_error(self, initialize):
        initialize.return_value = (None, EINIT)
        assert_that(calling(env.stdenv), raises(TransportError))
        env.deinitialize()
        initialize.return_value = (RawEnvironment(), 0)
        assert_that(env.stdenv(), is_(instance_of(RawEnvironment)))

    @patch('wstplink.env.configure_module')
    def test_configuration_error(self, configure_module):
        configure_module.side_effect = ConfigError("the configuration env failed validation")
        assert_that(calling(env.stdenv), raises(ConfigError))
        assert_that(calling(env.stdenv), raises(ConfigError))
        configure_module.assert_called_once()

    @patch('wstplink.env.token_capacity', 3)
    @patch('wstplink.env.configure_module')
    def test_capacity_is_configured(self, configure_module):
        assert_that(env.stdenv().token_capacity, is_(3))
