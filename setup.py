from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="ravenscroft",
    version="0.1.0",
    author="Ravenscroft Design",
    author_email="melissa@ravenscroftdesign.com",
    description="Flask backend for the Ravenscroft Design jewelry site: newsletter, content and contact APIs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/ravenscroftdesign/ravenscroft",
    packages=find_packages(exclude=["tests", "tests.*", "starter-template", "starter-template.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Framework :: Flask",
    ],
    python_requires=">=3.8",
    install_requires=[
        "Flask>=3.0.0",
        "Flask-CORS>=4.0.0",
        "click>=8.1",
        "python-dotenv>=1.0.0",
        "requests>=2.28.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-flask>=1.2",
            "black>=22.0",
            "flake8>=5.0",
        ],
    },
    zip_safe=False,
)
