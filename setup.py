from setuptools import setup, find_packages

setup(
    name='capcue',
    version='1.0.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    python_requires='>=3.11',
    install_requires=[
        'colored>=2.2.3',
        'halo>=0.0.31',
        'numpy>=1.26.2',
        'python-dotenv>=1.0.0',
    ],
    extras_require={
        'test': ['pytest>=7.4'],
    },
    entry_points='''
        [console_scripts]
        capcue=capcue.__main__:main
    ''',
    license='MIT',
    keywords='captions subtitles transcription karaoke',
    description='Turns timestamped speech transcriptions into time-aligned caption cues',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
)
