from setuptools import find_packages, setup

setup(
    name="photo-date-sync",
    version="0.1.0",
    description="將影像的建立、修改與拍攝時間同步為最早的時間",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "Pillow",
        "piexif",
        'pywin32; sys_platform == "win32"',
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "photo-date-sync=photo_date_sync.main:main",
        ],
    },
)
