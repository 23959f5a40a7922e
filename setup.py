# setup.py
from setuptools import setup, find_packages

setup(
    name="contextscan",
    version="0.1.0",
    description="Escaneo de directorios con conteo de tokens por archivo para estimar el uso de contexto de un LLM",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Encuentra automáticamente la carpeta 'contextscan'
    python_requires=">=3.9",
    install_requires=[
        "tiktoken",  # Codificador BPE por defecto (o200k_base)
    ],
    extras_require={
        "hf": ["transformers"],  # Tokenizadores locales de HuggingFace ('hf:<repo-id>')
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'contextscan=contextscan.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
