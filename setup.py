from setuptools import setup, find_packages

setup(
    name="fluent-rules",
    version="0.1.0",
    description="Fluent composition of validation rule lists with conditionals, fragments and macros",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        'fluent_rules': ['builder-config.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'pyyaml>=6.0',
        'jsonschema>=4.17.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.9',
)
