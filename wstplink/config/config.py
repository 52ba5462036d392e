"""
A configuration helper built on ConfigObj. Configuration files are layered - default, platform-specific,
user and local - and validated against a schema.

Configuration is applied to module globals: the values in the section named by the module path are
assigned to the attributes of the module with the same name.
"""
import logging
import os
import platform

from configobj import ConfigObj, ConfigObjError, Section, flatten_errors
from configobj.validate import Validator

logger = logging.getLogger(__name__)

# The default extension for configuration files
config_extension = '.cfg'


class ConfigError(Exception):
    """ The configuration could not be loaded or failed validation. """


def config_flavor(name, flavor=None):
    """
    >>> config_flavor('env')
    'env'
    >>> config_flavor('env', 'schema')
    'env.schema'
    """
    return name if not flavor else name + '.' + flavor


def config_filename(name, directory):
    return os.path.join(directory, name + config_extension)


def load_config_file(file, must_exist=False) -> ConfigObj:
    """
    Loads a configuration file.
    :param file:        The configuration file to load
    :param must_exist:  when True, the file must exist or ConfigError is raised.
    :return: The ConfigObj instance for the file, which is empty when the file does not exist.
    """
    if not os.path.exists(file):
        if must_exist:
            raise ConfigError("configuration file %s does not exist" % file)
        return ConfigObj()
    try:
        return ConfigObj(file, interpolation='Template')
    except ConfigObjError as e:
        raise ConfigError("unable to parse configuration file %s: %s" % (file, e)) from e


def load_configspec(file) -> ConfigObj:
    """ Loads a validation schema. Schema values are check expressions, so they are not split into lists. """
    if not os.path.exists(file):
        return ConfigObj(_inspec=True)
    try:
        return ConfigObj(file, _inspec=True)
    except ConfigObjError as e:
        raise ConfigError("unable to parse configuration schema %s: %s" % (file, e)) from e


def load_config(name, directory, user_directory=None) -> ConfigObj:
    """
    Loads all the configuration files that relate to the given name and validates them.
    Configurations are merged in this order, later files overriding earlier ones:
    - the default specialization, name.default.cfg
    - the platform specialization, e.g. name.linux.cfg
    - the user override, ~/name.cfg
    - the local configuration, name.cfg
    The merged configuration is validated against name.schema.cfg, which also supplies default values.
    :param name: the base name of the configuration to load.
    :param directory: the directory containing the configuration files.
    :param user_directory: the directory containing the user override, by default the home directory.
    """
    def flavor_file(flavor=None):
        return load_config_file(config_filename(config_flavor(name, flavor), directory))

    user_directory = user_directory if user_directory is not None else os.path.expanduser('~')
    config = ConfigObj()
    config.merge(flavor_file('default'))
    config.merge(flavor_file(platform.system().lower()))
    config.merge(load_config_file(config_filename(name, user_directory)))
    config.merge(flavor_file())

    config.configspec = load_configspec(config_filename(config_flavor(name, 'schema'), directory))
    result = config.validate(Validator(), preserve_errors=True)
    if result is not True:
        failures = []
        for section_list, key, res in flatten_errors(config, result):
            section = '.'.join(section_list)
            if key is not None:
                failures.append("%s.%s: %s" % (section, key, res or 'missing'))
            else:
                failures.append("section %s is missing" % section)
        for failure in failures:
            logger.error("configuration %s failed validation - %s" % (name, failure))
        raise ConfigError("the configuration %s failed validation: %s" % (name, '; '.join(failures)))
    return config


def fetch_conf_path(conf: Section, path):
    """
    Retrieves the configuration section at a path of section names.
    :return: the section, or None if any section on the path is missing.
    """
    for p in path:
        conf = conf.get(p, None)
        if conf is None:
            return None
    return conf


def apply_conf(conf: Section, target):
    """
    Assigns the values in a configuration section to the attributes of target that have the same name.
    Values with no matching attribute, and nested sections, are ignored.
    """
    for k, v in conf.items():
        if not isinstance(v, Section) and hasattr(target, k):
            setattr(target, k, v)


def configure_module(module, config_name=None, directory=None, user_directory=None):
    """
    Applies configuration to a module. The configuration files are named after the last part of the
    module name and live alongside the module, unless config_name or directory are given.
    The section applied is named by the module path, e.g. [wstplink] [[env]] for wstplink.env.
    """
    name = module.__name__
    if not config_name:
        config_name = name.split('.')[-1]
    if directory is None:
        directory = os.path.dirname(os.path.abspath(module.__file__))
    conf = fetch_conf_path(load_config(config_name, directory, user_directory), name.split('.'))
    if conf is not None:
        apply_conf(conf, module)
    return conf
