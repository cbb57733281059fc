import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="asyncapi_to_code",
    version="1.0.0",
    description="Generate model classes with discriminator-based inheritance from AsyncAPI documents for PHP and C#",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Intended Audience :: Developers",
    ],
    keywords="asyncapi schema code generation php csharp dto template",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "asyncapi_to_code=asyncapi_to_code.asyncapi_to_code:asyncapi_to_code",
        ],
    },
    include_package_data=True,
    package_data={
        "asyncapi_to_code": ["templates/**/*.jinja2", "tests/test_data/**/*"],
    },
    zip_safe=False,
)
