from setuptools import setup
import os


def main():
    this_directory = os.path.abspath(os.path.dirname(__file__))
    with open(os.path.join(this_directory, 'README.rst'), 'r',
              encoding='utf-8') as f:
        long_description = f.read()

    setup(name='pyrn',
          version='1.0.0',
          description='Compiler for chemical reaction network statements',
          long_description=long_description,
          long_description_content_type='text/x-rst',
          packages=['pyrn', 'pyrn.export', 'pyrn.tests'],
          python_requires='>=3.6',
          install_requires=['numpy', 'scipy>=1.1', 'sympy>=1.6', 'networkx'],
          extras_require={'test': ['pytest']},
          keywords=['chemical', 'reaction', 'network', 'kinetics', 'ode'],
          classifiers=[
            'Development Status :: 4 - Beta',
            'Environment :: Console',
            'Intended Audience :: Science/Research',
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3',
            'Topic :: Scientific/Engineering :: Chemistry',
            'Topic :: Scientific/Engineering :: Mathematics',
            ],
          )


if __name__ == '__main__':
    main()
