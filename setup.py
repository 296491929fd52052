from setuptools import setup

setup(
    name="mp3_duration",
    author="yihong0618",
    author_email="zouzou0208@gmail.com",
    url="https://github.com/yihong0618/remote_mp3_duration",
    license="MIT",
    version="0.2.0",
    packages=["mp3_duration"],
    python_requires=">=3.7",
    install_requires=["requests"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["mp3_duration = mp3_duration.cli:main"],
    },
)
