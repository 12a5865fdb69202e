from setuptools import setup, find_packages

setup(
    name='docguards',
    version='0.1.0',
    description='Translate documentation comments into executable guard expressions over program code elements.',
    packages=find_packages(include=['docguards', 'docguards.*']),
    install_requires=[
        'fastapi',
        'uvicorn[standard]',
        'pydantic>=2',
    ],
    extras_require={
        'nlp': ['spacy>=3'],
        'test': ['pytest', 'httpx'],
    },
    python_requires='>=3.8',
    entry_points={
        'console_scripts': [
            'docguards-translate = docguards.cli:translate_main',
            'docguards-serve = docguards.cli:serve_main',
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
