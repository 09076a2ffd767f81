import os
from setuptools import setup, find_packages


def get_version():
    basedir = os.path.dirname(__file__)
    with open(os.path.join(basedir, 'src/venvlock/__version__.py')) as f:
        variables = {}
        exec(f.read(), variables)

        version = variables.get('__version__')
        if version:
            return version

    raise RuntimeError('No version info found.')


__version__ = get_version()

packages = ['venvlock']
for pkg in find_packages('src/venvlock'):
    packages.append('venvlock.' + pkg)

tests_require = [
    'pytest>=8.0.0,<9.0.0',
    'pytest-mock>=3.9.0,<4.0.0',
]

kwargs = dict(
    name='venvlock',
    license='MIT',
    version=__version__,
    description='Per-project virtualenvs with reproducible lock files.',
    long_description=open('README.rst').read(),
    packages=packages,
    package_dir={'': 'src'},
    python_requires='>=3.9.0',
    install_requires=[
        'cleo>=2.1.0,<3.0.0',
        'packaging>=24.0',
        'tomlkit>=0.11.4,<1.0.0',
        'platformdirs>=3.0.0,<5.0.0',
    ],
    include_package_data=True,
    tests_require=tests_require,
    extras_require={
        'test': tests_require,
    },
    classifiers=[
        'Intended Audience :: Developers',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
    ],
    entry_points={
        'console_scripts': ['venvlock = venvlock.console.application:main']
    }
)


setup(**kwargs)
