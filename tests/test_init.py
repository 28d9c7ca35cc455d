"""
Unit tests for texmaps package initialization and version.
"""

import re
import unittest


class TestInit(unittest.TestCase):
    """Test cases for the texmaps package initialization."""

    def test_version(self):
        import texmaps
        self.assertIsInstance(texmaps.__version__, str)
        self.assertTrue(re.match(r'^\d+\.\d+\.\d+', texmaps.__version__))

    def test_import_submodules(self):
        import texmaps.batch
        import texmaps.config
        import texmaps.processor
        import texmaps.image.io
        import texmaps.image.maps
        import texmaps.cli.main

        self.assertTrue(callable(texmaps.cli.main.main))

    def test_public_api(self):
        import texmaps
        for name in ("IntensityMap", "BoxBlur", "NormalMapGenerator", "SpecularMapGenerator",
                     "DisplacementMapGenerator", "SsaoGenerator", "MapProcessor", "BatchQueue",
                     "ProcessorSettings", "load_image", "save_image"):
            self.assertTrue(hasattr(texmaps, name), name)

    def test_available_map_types(self):
        from texmaps.image import get_available_map_types
        self.assertEqual(get_available_map_types(), ('normal', 'spec', 'displace', 'ssao'))


if __name__ == '__main__':
    unittest.main()
