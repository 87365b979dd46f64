import io
import os
import tempfile
import unittest

from cinder import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.out = io.StringIO()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, source):
        path = os.path.join(self.tmp.name, "prog.cin")
        with open(path, "w") as file:
            file.write(source)
        return path

    def test_parse_args(self):
        args = main.parse_args(["prog.cin", "--no-color", "-v"])
        self.assertEqual("prog.cin", args.file)
        self.assertTrue(args.no_color)
        self.assertTrue(args.verbose)

        args = main.parse_args([])
        self.assertIsNone(args.file)
        self.assertFalse(args.no_color)

    def test_run_file(self):
        code = main.main([self.write("var x = 2;\nprint x * 21;\n"), "--no-color"], out=self.out)
        self.assertEqual(0, code)
        self.assertEqual("42\n", self.out.getvalue())

    def test_exit_codes(self):
        cases = {
            "print ;": main.EX_DATAERR,
            '"open': main.EX_DATAERR,
            "print nope;": main.EX_SOFTWARE,
            "print 1;": 0,
        }
        for source, expected in cases.items():
            self.assertEqual(expected, main.main([self.write(source), "--no-color"], out=io.StringIO()), source)

    def test_missing_file(self):
        with self.assertRaises(SystemExit) as context:
            main.main([os.path.join(self.tmp.name, "missing.cin"), "--no-color"], out=self.out)

        self.assertEqual(1, context.exception.code)
        self.assertTrue(self.out.getvalue().startswith("error: "))


if __name__ == '__main__':
    unittest.main()
