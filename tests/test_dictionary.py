import json
import os
import tempfile
import unittest

from wordle_entropy.dictionary import (Dictionary, all_valid_words, dedupe, is_possible_answer,
                                       is_valid_word, load_default_dictionaries,
                                       load_dictionaries, load_words)
from wordle_entropy.errors import DictionaryLoadError


class TestLoadWords(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, name, content):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_text_file(self):
        path = self.write('words.txt', 'CRATE\ntrace\n\n  slate \ncrate\n')
        self.assertEqual(load_words(path), ['crate', 'trace', 'slate'])

    def test_json_file(self):
        path = self.write('words.json', json.dumps(['crate', 'Trace']))
        self.assertEqual(load_words(path), ['crate', 'trace'])

    def test_missing_file(self):
        with self.assertRaises(DictionaryLoadError):
            load_words(os.path.join(self.tmpdir.name, 'nope.txt'))

    def test_empty_file(self):
        with self.assertRaises(DictionaryLoadError):
            load_words(self.write('empty.txt', '\n\n'))

    def test_malformed_word(self):
        with self.assertRaises(DictionaryLoadError):
            load_words(self.write('bad.txt', 'crate\ncrates\n'))

    def test_bad_json(self):
        with self.assertRaises(DictionaryLoadError):
            load_words(self.write('bad.json', '{"words": '))
        with self.assertRaises(DictionaryLoadError):
            load_words(self.write('obj.json', '{"words": ["crate"]}'))

    def test_load_dictionaries(self):
        answers = self.write('answers.txt', 'crate\ntrace\n')
        guesses = self.write('guesses.txt', 'soare\ncrate\n')
        dictionary = load_dictionaries(answers, guesses)
        self.assertEqual(dictionary.possible_answers, ['crate', 'trace'])
        self.assertEqual(dictionary.all_words, ['crate', 'trace', 'soare'])

    def test_load_default_layout(self):
        os.mkdir(os.path.join(self.tmpdir.name, 'words'))
        self.write(os.path.join('words', 'answers.txt'), 'crate\n')
        self.write(os.path.join('words', 'allowed_guesses.txt'), 'soare\n')
        dictionary = load_default_dictionaries(self.tmpdir.name)
        self.assertEqual(dictionary.all_words, ['crate', 'soare'])

    def test_any_failure_is_fatal(self):
        answers = self.write('answers.txt', 'crate\n')
        with self.assertRaises(DictionaryLoadError):
            load_dictionaries(answers, os.path.join(self.tmpdir.name, 'missing.txt'))


class TestDictionary(unittest.TestCase):
    def setUp(self):
        self.dictionary = Dictionary.from_words(['Crate', 'trace', 'crate'], ['soare', 'trace'])

    def test_union_is_deduplicated(self):
        self.assertEqual(self.dictionary.possible_answers, ['crate', 'trace'])
        self.assertEqual(self.dictionary.all_words, ['crate', 'trace', 'soare'])
        self.assertEqual(all_valid_words(['a'], ['b', 'a']), ['a', 'b'])
        self.assertEqual(dedupe(['b', 'a', 'b']), ['b', 'a'])

    def test_membership(self):
        self.assertTrue(is_valid_word('SOARE', self.dictionary))
        self.assertIn('crate', self.dictionary)
        self.assertNotIn('fuzzy', self.dictionary)
        self.assertNotIn(None, self.dictionary)
        self.assertTrue(is_possible_answer('Trace', self.dictionary.possible_answers))
        self.assertFalse(is_possible_answer('soare', self.dictionary.possible_answers))

    def test_empty_answers_rejected(self):
        with self.assertRaises(DictionaryLoadError):
            Dictionary.from_words([], ['soare'])

    def test_invalid_word_rejected(self):
        with self.assertRaises(DictionaryLoadError):
            Dictionary.from_words(['crate', 'abc'])


if __name__ == '__main__':
    unittest.main()
