from setuptools import setup, find_packages

setup(
    name='mckit',
    version='0.1.0',
    description='Markov Chain Kit: empirical estimators for finite-state Markov chains',
    url='https://github.com/chang-group/mckit',
    author='Jeff Thompson',
    author_email='jeffreyt@ucr.edu',
    classifiers=[  
        'Development Status :: 3 - Alpha',
        'Topic :: Scientific/Engineering :: Mathematics',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3'
    ],
    packages=find_packages(exclude=['contrib', 'docs', 'tests']),
    python_requires='>=3.8',
    install_requires=['numpy', 'scipy', 'deeptime'],
    extras_require={'test': ['pytest']}
)
