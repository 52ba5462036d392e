from setuptools import setup


setup(
    name='wstplink',
    version='0.1.0',
    description='Links for exchanging symbolic expressions between endpoints over pluggable transports.',
    url='',
    author='',
    author_email='',
    license='LGPL',
    packages=['wstplink', 'wstplink.config', 'wstplink.link', 'wstplink.native',
              'wstplink.support', 'wstplink.transport'],
    package_data={'wstplink': ['*.cfg']},
    python_requires='>=3.8',
    install_requires=[
        'configobj>=5.0.9',
    ],
    extras_require={
        'test': [
            'pytest',
            'PyHamcrest',
            'timeout-decorator',
        ],
    },
    zip_safe=False,
)
