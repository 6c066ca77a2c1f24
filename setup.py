from setuptools import setup, find_packages

setup(name='pyoverload',
      version='0.1.0',
      description='check @overload groups of python modules',
      packages=find_packages(include=['pyoverload', 'pyoverload.*']),
      python_requires='>=3.9',
      install_requires=['pygments'],
      extras_require={'test': ['pytest']},
      entry_points={
          'console_scripts': ['pyoverload = pyoverload.cmdline:main'],
      })
