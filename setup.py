from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()
with open("mdcolor/semver.txt", encoding="utf-8") as fh:
    semver = fh.read().strip()
with open("requirements.txt", encoding="utf-8") as fh:
    install_requires = [x.strip() for x in fh.read().strip().split("\n") if len(x) and x[0].isalpha()]

setup(
    name="mdcolor",
    version=semver,
    description="Colors Markdown source for the terminal, with clickable links.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"mdcolor": ["py.typed", "semver.txt", "themes.kdl"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require={"test": ["pytest>=7.4"]},
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.9",
        "Topic :: Text Processing :: Markup :: Markdown",
    ],
    entry_points={"console_scripts": ["mdcolor = mdcolor:main"]},
)
