"""Single-line text buffer behind the add and rename prompts."""


class EditBuffer:
    def __init__(self, value: str = ""):
        self.value = value
        self.cursor = len(value)

    def set(self, value: str):
        self.value = value
        self.cursor = len(value)

    def reset(self):
        self.set("")

    def insert(self, text: str):
        self.value = self.value[:self.cursor] + text + self.value[self.cursor:]
        self.cursor += len(text)

    def backspace(self):
        if self.cursor == 0:
            return
        self.value = self.value[:self.cursor - 1] + self.value[self.cursor:]
        self.cursor -= 1

    def delete(self):
        self.value = self.value[:self.cursor] + self.value[self.cursor + 1:]

    def left(self):
        self.cursor = max(0, self.cursor - 1)

    def right(self):
        self.cursor = min(len(self.value), self.cursor + 1)

    def home(self):
        self.cursor = 0

    def end(self):
        self.cursor = len(self.value)
