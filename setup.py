from setuptools import setup, find_packages

with open('README.md') as f:
    readme = f.read()

setup(
    name='cxmlbuilder',
    version='0.1.0',
    description='Fluent builder for voice application (CXML) documents',
    long_description=readme,
    long_description_content_type='text/markdown',
    author='cxmlbuilder contributors',
    license='MIT',
    packages=find_packages(exclude=('tests', 'docs')),
    python_requires='>=3.9',
    install_requires=[
        'structlog>=23.1.0',
        'pydantic>=2.0.0',
        'pydantic-settings>=2.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
        ],
    },
)
