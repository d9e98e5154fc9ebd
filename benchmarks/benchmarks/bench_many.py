from pyparsa import many, run_parser, take, whitespace, word


class TimeMany:
    def setup(self):
        self.chars = many(take("a"))
        self.words = many(word.after(whitespace))
        self.small = "a" * 1000
        self.large = "a" * 100000
        self.text = "lorem ipsum " * 10000

    def time_many_small(self):
        run_parser(self.chars, self.small)

    def time_many_large(self):
        run_parser(self.chars, self.large)

    def time_many_words(self):
        run_parser(self.words, self.text)
