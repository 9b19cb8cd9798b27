#!/usr/bin/env python3

try:
    from setuptools import setup
except ImportError:
    print('\nSetuptools was not found. Install setuptools for python 3.\n')
    import sys
    sys.exit(1)

import os

current_dir = os.path.dirname(os.path.abspath(__file__))

with open(os.path.join(current_dir, 'README.rst'), encoding='utf-8') as readme_fd:
    LONG_DESCRIPTION = readme_fd.read()

setup(name="clipclean",
      version="0.3.0",
      description="Removes the tracking parameters of the URLs you copy",
      long_description=LONG_DESCRIPTION,
      license='zlib',

      classifiers=['Development Status :: 4 - Beta',
                   'Topic :: Internet :: WWW/HTTP',
                   'Topic :: Utilities',
                   'Environment :: Console',
                   'Intended Audience :: End Users/Desktop',
                   'License :: OSI Approved :: zlib/libpng License',
                   'Natural Language :: English',
                   'Programming Language :: Python :: 3 :: Only'],
      keywords=['clipboard', 'url', 'tracking', 'privacy', 'utm'],
      packages=['clipclean'],
      package_data={'clipclean': ['default_config.cfg']},
      python_requires='>=3.9',
      entry_points={'console_scripts': ['clipclean = clipclean.__main__:run']},
      install_requires=['pyperclip'],
      extras_require={'test': ['pytest']})
