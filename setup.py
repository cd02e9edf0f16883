import os
import re

from setuptools import setup


def get_version():
    module_init = 'cherry/version.py'

    if not os.path.isfile(module_init):
        module_init = '../' + module_init
        if not os.path.isfile(module_init):
            raise ValueError('Unable to determine version!')

    with open(module_init) as version_file:
        return re.search(r'__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
                         version_file.read()).group(1)


setup(name='cherry',
      version=get_version(),
      description='Software 2D rendering onto caller-owned pixel buffers',
      license='LGPL',
      packages=['cherry'],
      install_requires=['coloraide', 'colorlog', 'numpy', 'traitlets', 'wrapt'],
      extras_require={
          'test': ['pytest']
      },
      keywords='rendering canvas blending rasterization blur bloom',
      include_package_data=True,
      python_requires='>=3.8',
      zip_safe=False,
      classifiers=[
          'Development Status :: 3 - Alpha',
          'Intended Audience :: Developers',
          'Topic :: Multimedia :: Graphics',
          'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
          'Programming Language :: Python :: 3 :: Only'
      ])
