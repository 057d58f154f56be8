# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="structure4ai",
    version="0.1.0",
    description="Directory structure generator with Markdown, JSON, HTML and consolidated source outputs",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["structure4ai", "structure4ai.*"]),
    package_data={"structure4ai": ["interface/locales/*.json"]},
    python_requires=">=3.9",
    install_requires=[
        "tiktoken",  # Token estimation for the consolidated document
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'structure4ai=structure4ai.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
