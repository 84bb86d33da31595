"""Static HTML for the browser view; all layout numbers come from the stream."""

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>LiftCar</title>
  <style>
    body { font-family: sans-serif; }
    .app { display: flex; align-items: center; }
    .shaft {
      width: 200px; height: 800px; background-color: #f2f2f2; border: 1px solid #ccc;
      position: relative;
    }
    .car {
      position: absolute; width: 100%; height: 200px; background-color: hotpink;
      display: flex; bottom: 0;
    }
    .doors { display: flex; width: 100%; height: 100%; border: 1px solid #ccc; }
    .door { width: 50%; height: 100%; transition: transform 0.5s ease-in-out; }
    .door.left { background-color: tomato; border-right: 1px solid #ccc; transform-origin: left; }
    .door.right { background-color: orange; border-left: 1px solid #ccc; transform-origin: right; }
    .controls { display: flex; flex-direction: column; align-items: center; margin: 20px; }
    .controls button {
      padding: 10px 20px; margin-bottom: 10px; background-color: #007bff; color: #fff;
      border: none; border-radius: 4px; cursor: pointer;
    }
  </style>
</head>
<body>
  <div class="app">
    <div class="shaft">
      <div class="car" id="car">
        <div class="doors">
          <div class="door left" id="door-left"></div>
          <div class="door right" id="door-right"></div>
        </div>
      </div>
    </div>
    <div class="controls" id="controls"></div>
  </div>
  <script>
    const scheme = location.protocol === "https:" ? "wss" : "ws";
    const socket = new WebSocket(`${scheme}://${location.host}/ws/stream`);
    let buttonsDrawn = false;

    function drawButtons(buttons) {
      const controls = document.getElementById("controls");
      controls.innerHTML = "";
      for (const button of buttons) {
        const el = document.createElement("button");
        el.textContent = button.label;
        el.onclick = () => socket.send(JSON.stringify({ floor: button.floor }));
        controls.appendChild(el);
      }
      buttonsDrawn = true;
    }

    socket.onmessage = (message) => {
      const payload = JSON.parse(message.data);
      if (payload.error) {
        console.warn(payload.error);
        return;
      }
      const view = payload.view;
      const car = document.getElementById("car");
      car.style.transition = `bottom ${view.car.transition_seconds}s linear`;
      car.style.bottom = `${view.car.bottom_percent}%`;
      document.getElementById("door-left").style.transform = view.doors.left;
      document.getElementById("door-right").style.transform = view.doors.right;
      if (!buttonsDrawn) {
        drawButtons(view.buttons);
      }
    };
  </script>
</body>
</html>
"""
