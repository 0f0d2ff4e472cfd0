from setuptools import find_packages, setup

setup(
    name='tftpcodec',
    version='1.0.0',
    description='RFC1350 (TFTP) packet encoder/decoder with error mapping',
    author='isantolin',
    author_email='',
    packages=find_packages(include=['tftpcodec', 'tftpcodec.*']),
    python_requires='>=3.11',
    install_requires=[
        'construct',
        'msgspec',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
)
