import setuptools

setuptools.setup(
	name='tagparse',
	version='0.1.0',
	packages=[
		'tagparse',
		'tagparse.parsing',
		'tagparse.scanning',
		'tagparse.support',
	],
	description='Backtracking parsers built from grammar annotations on dataclasses',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.10',
	classifiers=[
		"Programming Language :: Python :: 3.10",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Development Status :: 3 - Alpha",
	],
)
